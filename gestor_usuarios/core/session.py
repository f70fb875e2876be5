"""Estado de autenticación compartido entre el cliente y la interfaz."""

from __future__ import annotations

import logging
from typing import Optional

from gestor_usuarios.infrastructure.storage import KeyValueStorage, MemoryStorage

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"


class SessionContext:
    """Contexto de sesión explícito que se entrega al cliente HTTP.

    El token se guarda en ``storage`` bajo la clave ``"token"``, de modo que
    una sesión persistida se recupera al volver a abrir la aplicación. No se
    valida ni se renueva: el servicio remoto es quien lo acepta o rechaza.
    """

    def __init__(self, storage: Optional[KeyValueStorage] = None) -> None:
        self._storage = storage if storage is not None else MemoryStorage()
        self._token: Optional[str] = self._storage.get(TOKEN_KEY) or None

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    def start(self, token: str) -> None:
        self._token = token
        self._storage.set(TOKEN_KEY, token)
        logger.info("Sesión iniciada")

    def clear(self) -> None:
        self._token = None
        self._storage.remove(TOKEN_KEY)
        logger.info("Sesión cerrada")


__all__ = ["SessionContext", "TOKEN_KEY"]
