"""Implementaciones de repositorios para acceso a datos."""

from __future__ import annotations

import logging

from gestor_usuarios.infrastructure.api_client import APIClient, NetworkError
from gestor_usuarios.models.user import Page, User, UserUpdate

logger = logging.getLogger(__name__)


class UserRepository:
    """Repositorio de usuarios basado en un cliente API."""

    def __init__(self, api_client: APIClient) -> None:
        self._api_client = api_client

    def list_users(self, page: int = 1) -> Page:
        """Devuelve una página de usuarios con sus metadatos."""

        payload = self._api_client.obtener_usuarios(page)
        try:
            return Page.from_api(payload)
        except (KeyError, TypeError, ValueError) as exc:
            raise NetworkError(f"Página {page} con formato inválido ({exc}).") from exc

    def get_user(self, user_id: int) -> User:
        datos = self._api_client.obtener_usuario(user_id)
        try:
            return User.from_api(datos)
        except (KeyError, TypeError, ValueError) as exc:
            raise NetworkError(f"Usuario {user_id} con formato inválido ({exc}).") from exc

    def update_user(self, user_id: int, cambios: UserUpdate) -> dict:
        return self._api_client.actualizar_usuario(user_id, cambios.to_payload())

    def delete_user(self, user_id: int) -> bool:
        eliminado = self._api_client.eliminar_usuario(user_id)
        logger.info("DELETE usuario %s -> %s", user_id, eliminado)
        return eliminado

    def login(self, email: str, password: str) -> str:
        return self._api_client.login(email, password)


__all__ = ["UserRepository"]
