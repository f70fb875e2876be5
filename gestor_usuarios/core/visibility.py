"""Detección del cruce del último elemento hacia el área visible."""

from __future__ import annotations

from typing import Callable


class BoundaryTrigger:
    """Dispara ``callback`` una sola vez por cada entrada en la vista.

    La interfaz informa la visibilidad del centinela con :meth:`update`; sólo
    la transición de oculto a visible produce un disparo.
    """

    def __init__(self, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._visible = False

    @property
    def visible(self) -> bool:
        return self._visible

    def update(self, visible: bool) -> bool:
        """Registra la visibilidad actual; devuelve ``True`` si hubo disparo."""

        crossed = visible and not self._visible
        self._visible = visible
        if crossed:
            self._callback()
        return crossed

    def rearm(self) -> None:
        # Tras renderizar nuevos elementos el centinela es otro.
        self._visible = False


__all__ = ["BoundaryTrigger"]
