"""Notificaciones temporales mostradas sobre el listado."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Literal, Optional

from gestor_usuarios.core.scheduler import ScheduledTask, Scheduler

logger = logging.getLogger(__name__)

NotificationKind = Literal["success", "error"]


@dataclass(frozen=True, slots=True)
class Notification:
    message: str
    kind: NotificationKind = "success"


class NotificationCenter:
    """Guarda la notificación vigente y la retira pasado ``delay_ms``."""

    def __init__(self, scheduler: Scheduler, delay_ms: int = 3000) -> None:
        self._scheduler = scheduler
        self.delay_ms = delay_ms
        self.current: Optional[Notification] = None
        self._pending: Optional[ScheduledTask] = None
        self._listeners: List[Callable[[Optional[Notification]], None]] = []

    def subscribe(self, listener: Callable[[Optional[Notification]], None]) -> None:
        self._listeners.append(listener)

    def show(self, message: str, kind: NotificationKind = "success") -> Notification:
        if self._pending is not None:
            self._pending.cancel()
        self.current = Notification(message=message, kind=kind)
        self._pending = self._scheduler.call_later(self.delay_ms, self.clear)
        self._emit()
        return self.current

    def clear(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        if self.current is None:
            return
        self.current = None
        self._emit()

    def _emit(self) -> None:
        for listener in list(self._listeners):
            listener(self.current)


__all__ = ["Notification", "NotificationCenter", "NotificationKind"]
