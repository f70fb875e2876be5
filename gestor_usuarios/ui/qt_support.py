"""Implementaciones Qt del planificador y del ejecutor de peticiones."""

from __future__ import annotations

from typing import Callable, Dict, Tuple

from PyQt6.QtCore import QObject, QThread, QTimer, pyqtSignal, pyqtSlot

from gestor_usuarios.core.scheduler import ErrorCallback, Job, SuccessCallback


class QtScheduledTask:
    def __init__(self, timer: QTimer) -> None:
        self._timer = timer
        self._done = False

    @property
    def active(self) -> bool:
        return not self._done and self._timer.isActive()

    def cancel(self) -> None:
        if self._done:
            return
        self._done = True
        self._timer.stop()
        self._timer.deleteLater()

    def _fired(self) -> None:
        self._done = True
        self._timer.deleteLater()


class QtScheduler:
    """Temporizadores de un solo disparo sobre el bucle de eventos de Qt."""

    def __init__(self, parent: QObject | None = None) -> None:
        self._parent = parent

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> QtScheduledTask:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        task = QtScheduledTask(timer)
        timer.timeout.connect(task._fired)
        timer.timeout.connect(callback)
        timer.start(delay_ms)
        return task


class _JobWorker(QObject):
    finished = pyqtSignal(object)
    error = pyqtSignal(object)

    def __init__(self, job: Job) -> None:
        super().__init__()
        self._job = job

    def run(self) -> None:
        try:
            resultado = self._job()
        except Exception as exc:
            self.error.emit(exc)
            return
        self.finished.emit(resultado)


class _Dispatcher(QObject):
    """Vive en el hilo de la interfaz; recibe los resultados del worker."""

    def __init__(
        self,
        on_success: SuccessCallback,
        on_error: ErrorCallback,
        on_finished: Callable[["_Dispatcher"], None],
    ) -> None:
        super().__init__()
        self._on_success = on_success
        self._on_error = on_error
        self._on_finished = on_finished

    @pyqtSlot(object)
    def success(self, resultado: object) -> None:
        self._on_success(resultado)

    @pyqtSlot(object)
    def failure(self, exc: object) -> None:
        self._on_error(exc)  # type: ignore[arg-type]

    @pyqtSlot()
    def thread_finished(self) -> None:
        self._on_finished(self)


class QtThreadRunner:
    """Ejecuta cada petición en un ``QThread`` y responde en el hilo de la UI.

    Los hilos tienen como padre a ``parent``; al terminar, el hilo, el worker
    y el despachador se liberan con ``deleteLater``.
    """

    def __init__(self, parent: QObject | None = None) -> None:
        self._parent = parent
        self._activos: Dict[_Dispatcher, Tuple[QThread, _JobWorker]] = {}

    @property
    def pending(self) -> int:
        return len(self._activos)

    def run(self, job: Job, on_success: SuccessCallback, on_error: ErrorCallback) -> None:
        thread = QThread(self._parent)
        worker = _JobWorker(job)
        dispatcher = _Dispatcher(on_success, on_error, self._limpiar_hilo)
        worker.moveToThread(thread)

        thread.started.connect(worker.run)
        worker.finished.connect(dispatcher.success)
        worker.error.connect(dispatcher.failure)
        worker.finished.connect(thread.quit)
        worker.error.connect(thread.quit)
        thread.finished.connect(dispatcher.thread_finished)

        self._activos[dispatcher] = (thread, worker)
        thread.start()

    def _limpiar_hilo(self, dispatcher: _Dispatcher) -> None:
        entrada = self._activos.pop(dispatcher, None)
        if entrada is None:
            return
        thread, worker = entrada
        thread.wait()
        worker.deleteLater()
        thread.deleteLater()
        dispatcher.deleteLater()


__all__ = ["QtScheduledTask", "QtScheduler", "QtThreadRunner"]
