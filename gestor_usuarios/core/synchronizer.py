"""Sincronización del listado incremental de usuarios.

Acumula las páginas obtenidas del servicio remoto en una sola lista sin
duplicados, avanza de página cuando la interfaz avisa que el final del
listado entró en la vista y aplica la búsqueda como filtro local.

Ciclo de una carga::

    Idle -> Loading -> Idle (página fusionada)
                    -> Idle (error registrado en ``state.error``)

Las respuestas se entregan por continuación a través de un ``Runner``; un
contador de generación descarta las que llegan después de un ``reset()``.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Protocol

from gestor_usuarios.core.notifications import NotificationCenter
from gestor_usuarios.core.scheduler import InlineRunner, Runner
from gestor_usuarios.core.state import ListState
from gestor_usuarios.models.user import Page, User

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "No se pudieron cargar los usuarios. Intenta nuevamente."
DELETE_SUCCESS_MESSAGE = "Usuario eliminado correctamente."
DELETE_ERROR_MESSAGE = "No se pudo eliminar el usuario."


class UserSource(Protocol):
    def list_users(self, page: int = 1) -> Page: ...

    def delete_user(self, user_id: int) -> bool: ...


class ListSynchronizer:
    """Coordina cargas paginadas, búsqueda y eliminación sobre ``ListState``."""

    def __init__(
        self,
        source: UserSource,
        notifications: NotificationCenter,
        *,
        runner: Optional[Runner] = None,
        state: Optional[ListState] = None,
    ) -> None:
        self._source = source
        self._notifications = notifications
        self._runner = runner if runner is not None else InlineRunner()
        self.state = state if state is not None else ListState()
        self._generation = 0
        self._listeners: List[Callable[[ListState], None]] = []

    # ------------------------------------------------------------------
    # Suscripción
    # ------------------------------------------------------------------
    def subscribe(self, listener: Callable[[ListState], None]) -> None:
        self._listeners.append(listener)

    def _emit(self) -> None:
        for listener in list(self._listeners):
            listener(self.state)

    # ------------------------------------------------------------------
    # Paginación
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Vacía el acumulado y vuelve a la primera página."""

        self._generation += 1
        self.state.accumulated = []
        self.state.current_page = 1
        self.state.total_pages = 0
        self.state.has_more = True
        self.state.loading = False
        self.state.error = ""
        logger.debug("Listado reiniciado (generación %s)", self._generation)
        self._emit()

    def mount(self) -> None:
        """Carga inicial al abrir la vista."""

        self.reset()
        self.load_next_page()

    def reload(self) -> None:
        self.mount()

    def load_next_page(self) -> bool:
        """Solicita ``current_page``; devuelve ``False`` si no se inició la carga."""

        if self.state.loading or not self.state.has_more:
            return False

        page = self.state.current_page
        generation = self._generation
        self.state.loading = True
        self._emit()
        logger.debug("Cargando página %s", page)

        self._runner.run(
            lambda: self._source.list_users(page),
            lambda resultado: self._on_page_loaded(generation, page, resultado),
            lambda exc: self._on_page_failed(generation, page, exc),
        )
        return True

    def on_boundary_crossed(self) -> bool:
        """El final del listado entró en la vista: avanza y pide otra página."""

        if self.state.loading or not self.state.has_more:
            return False
        if self.state.total_pages == 0:
            # La primera página todavía no llegó: se reintenta sin avanzar.
            return self.load_next_page()
        self.state.current_page += 1
        return self.load_next_page()

    def _on_page_loaded(self, generation: int, page: int, resultado: Page) -> None:
        if generation != self._generation:
            logger.debug("Página %s descartada: respuesta de una generación anterior", page)
            return

        if page == 1:
            self.state.accumulated = _unique(resultado.items)
        else:
            conocidos = self.state.ids()
            nuevos = [usuario for usuario in resultado.items if usuario.id not in conocidos]
            self.state.accumulated = self.state.accumulated + _unique(nuevos)

        self.state.total_pages = resultado.total_pages
        self.state.has_more = page < resultado.total_pages
        self.state.loading = False
        self.state.error = ""
        logger.info(
            "Página %s/%s fusionada: %s usuarios acumulados",
            page,
            resultado.total_pages,
            len(self.state.accumulated),
        )
        self._emit()

    def _on_page_failed(self, generation: int, page: int, exc: Exception) -> None:
        if generation != self._generation:
            return

        logger.warning("Error cargando la página %s: %s", page, exc)
        self.state.loading = False
        self.state.error = LOAD_ERROR_MESSAGE
        if page > 1 and self.state.current_page == page:
            # La próxima entrada en la vista reintenta la misma página.
            self.state.current_page = page - 1
        self._emit()

    # ------------------------------------------------------------------
    # Búsqueda
    # ------------------------------------------------------------------
    def set_search_term(self, term: str) -> None:
        """Actualiza el filtro; sólo al vaciarlo se recarga desde la página 1."""

        previous = self.state.search_term
        self.state.search_term = term
        if previous.strip() and not term.strip():
            self.mount()
            return
        self._emit()

    @property
    def filtered_view(self) -> List[User]:
        return self.state.filtered_view

    # ------------------------------------------------------------------
    # Edición
    # ------------------------------------------------------------------
    def delete(self, user_id: int) -> None:
        """Elimina remotamente y, si el servicio confirma, también del listado."""

        def _ok(eliminado: bool) -> None:
            if not eliminado:
                _error(RuntimeError(f"El servicio no confirmó la eliminación de {user_id}"))
                return
            self.state.accumulated = [u for u in self.state.accumulated if u.id != user_id]
            logger.info("Usuario %s eliminado", user_id)
            self._notifications.show(DELETE_SUCCESS_MESSAGE, "success")
            self._emit()

        def _error(exc: Exception) -> None:
            logger.warning("Error eliminando el usuario %s: %s", user_id, exc)
            self._notifications.show(DELETE_ERROR_MESSAGE, "error")

        self._runner.run(lambda: self._source.delete_user(user_id), _ok, _error)

    def apply_update(self, usuario: User) -> bool:
        """Reemplaza en su posición al usuario con el mismo ``id``."""

        for index, actual in enumerate(self.state.accumulated):
            if actual.id == usuario.id:
                acumulado = list(self.state.accumulated)
                acumulado[index] = usuario
                self.state.accumulated = acumulado
                self._emit()
                return True
        return False


def _unique(usuarios) -> List[User]:
    vistos: set[int] = set()
    resultado: List[User] = []
    for usuario in usuarios:
        if usuario.id in vistos:
            continue
        vistos.add(usuario.id)
        resultado.append(usuario)
    return resultado


__all__ = [
    "DELETE_ERROR_MESSAGE",
    "DELETE_SUCCESS_MESSAGE",
    "LOAD_ERROR_MESSAGE",
    "ListSynchronizer",
    "UserSource",
]
