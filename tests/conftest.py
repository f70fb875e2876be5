"""Dobles de prueba compartidos."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

import pytest

from gestor_usuarios.core.notifications import NotificationCenter
from gestor_usuarios.core.synchronizer import ListSynchronizer
from gestor_usuarios.infrastructure.api_client import NetworkError
from gestor_usuarios.models.user import Page, User


def make_user(user_id: int, first_name: str = "", last_name: str = "", email: str = "") -> User:
    return User(
        id=user_id,
        email=email or f"user{user_id}@reqres.in",
        first_name=first_name or f"Nombre{user_id}",
        last_name=last_name or f"Apellido{user_id}",
        avatar=f"https://reqres.in/img/faces/{user_id}-image.jpg",
    )


def make_page(page_number: int, users: List[User], total_pages: int, per_page: int = 2) -> Page:
    return Page(
        page_number=page_number,
        per_page=per_page,
        total=per_page * total_pages,
        total_pages=total_pages,
        items=tuple(users),
    )


class FakeSource:
    """Repositorio en memoria con páginas fijas y fallas configurables."""

    def __init__(self, pages: Optional[Dict[int, Page]] = None) -> None:
        self.pages: Dict[int, Page] = dict(pages or {})
        self.requested: List[int] = []
        self.deleted: List[int] = []
        self.fail_pages: set[int] = set()
        self.fail_delete = False
        self.delete_result = True

    def list_users(self, page: int = 1) -> Page:
        self.requested.append(page)
        if page in self.fail_pages:
            raise NetworkError(f"falla simulada en página {page}", status=500)
        return self.pages[page]

    def delete_user(self, user_id: int) -> bool:
        if self.fail_delete:
            raise NetworkError("falla simulada al eliminar", status=500)
        self.deleted.append(user_id)
        return self.delete_result


class DeferredRunner:
    """Guarda los trabajos y los completa sólo cuando la prueba lo pide."""

    def __init__(self) -> None:
        self.pending: List[tuple] = []

    def run(self, job, on_success, on_error) -> None:
        self.pending.append((job, on_success, on_error))

    def complete_next(self) -> None:
        job, on_success, on_error = self.pending.pop(0)
        try:
            resultado = job()
        except Exception as exc:
            on_error(exc)
            return
        on_success(resultado)


class ManualTask:
    def __init__(self, due: int, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.fired = False

    @property
    def active(self) -> bool:
        return not self.cancelled and not self.fired

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Reloj manual: las tareas vencen al llamar :meth:`advance`."""

    def __init__(self) -> None:
        self.now = 0
        self.tasks: List[ManualTask] = []

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ManualTask:
        task = ManualTask(self.now + delay_ms, callback)
        self.tasks.append(task)
        return task

    def advance(self, ms: int) -> None:
        self.now += ms
        for task in list(self.tasks):
            if task.active and task.due <= self.now:
                task.fired = True
                task.callback()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def notifications(scheduler: ManualScheduler) -> NotificationCenter:
    return NotificationCenter(scheduler, delay_ms=3000)


@pytest.fixture
def two_page_source() -> FakeSource:
    return FakeSource(
        {
            1: make_page(1, [make_user(1, "George", "Bluth"), make_user(2, "Janet", "Weaver")], 2),
            2: make_page(2, [make_user(3, "Emma", "Wong"), make_user(4, "Eve", "Holt")], 2),
        }
    )


@pytest.fixture
def synchronizer(two_page_source: FakeSource, notifications: NotificationCenter) -> ListSynchronizer:
    return ListSynchronizer(two_page_source, notifications)
