"""Planificación de tareas diferidas y ejecución de peticiones.

La lógica de la aplicación no depende de Qt: recibe un :class:`Scheduler`
para los temporizadores y un :class:`Runner` para las llamadas de red. La
interfaz gráfica aporta implementaciones basadas en ``QTimer`` y ``QThread``.
"""

from __future__ import annotations

from typing import Callable, Protocol, TypeVar

T = TypeVar("T")

Job = Callable[[], T]
SuccessCallback = Callable[[T], None]
ErrorCallback = Callable[[Exception], None]


class ScheduledTask(Protocol):
    """Tarea diferida que todavía puede cancelarse."""

    def cancel(self) -> None: ...

    @property
    def active(self) -> bool: ...


class Scheduler(Protocol):
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledTask: ...


class Runner(Protocol):
    """Ejecuta ``job`` y entrega su resultado mediante continuaciones."""

    def run(self, job: Job, on_success: SuccessCallback, on_error: ErrorCallback) -> None: ...


class InlineRunner:
    """Ejecuta el trabajo en el hilo actual y llama la continuación al terminar."""

    def run(self, job: Job, on_success: SuccessCallback, on_error: ErrorCallback) -> None:
        try:
            resultado = job()
        except Exception as exc:
            on_error(exc)
            return
        on_success(resultado)


__all__ = [
    "ErrorCallback",
    "InlineRunner",
    "Job",
    "Runner",
    "ScheduledTask",
    "Scheduler",
    "SuccessCallback",
]
