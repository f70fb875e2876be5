"""Servicios de aplicación para autenticación y edición de usuarios."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from gestor_usuarios.core.session import SessionContext
from gestor_usuarios.infrastructure.api_client import NetworkError
from gestor_usuarios.infrastructure.repositories import UserRepository
from gestor_usuarios.models.user import User, UserUpdate

logger = logging.getLogger(__name__)


class ValidationError(ValueError):
    """Datos de formulario incompletos o inválidos."""


@dataclass(frozen=True, slots=True)
class OperationResult:
    """Resultado de una operación expresado para la interfaz."""

    ok: bool
    message: str = ""
    user: Optional[User] = None


class AuthService:
    """Inicio y cierre de sesión contra el endpoint ``/login``."""

    def __init__(self, repository: UserRepository, session: SessionContext) -> None:
        self._repository = repository
        self._session = session

    @property
    def is_authenticated(self) -> bool:
        return self._session.is_authenticated

    def login(self, email: str, password: str) -> OperationResult:
        email = email.strip()
        if not email or not password:
            raise ValidationError("Correo y contraseña son obligatorios.")

        try:
            token = self._repository.login(email, password)
        except NetworkError as exc:
            logger.warning("Login fallido para %s: %s", email, exc)
            if exc.status in (400, 401):
                return OperationResult(ok=False, message="Credenciales inválidas.")
            return OperationResult(ok=False, message="No se pudo iniciar sesión. Intenta nuevamente.")

        self._session.start(token)
        return OperationResult(ok=True)

    def logout(self) -> None:
        self._session.clear()


class UserEditService:
    """Carga y guarda los datos del formulario de edición."""

    LOAD_ERROR = "No se pudieron obtener los datos del usuario. Intenta nuevamente."
    SAVE_ERROR = "No se pudo actualizar el usuario. Intenta nuevamente."
    SAVE_OK = "Usuario actualizado correctamente."

    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository

    def load(self, user_id: int) -> OperationResult:
        try:
            usuario = self._repository.get_user(user_id)
        except NetworkError as exc:
            logger.warning("Error obteniendo el usuario %s: %s", user_id, exc)
            return OperationResult(ok=False, message=self.LOAD_ERROR)
        return OperationResult(ok=True, user=usuario)

    @staticmethod
    def validar(first_name: str, last_name: str, email: str) -> UserUpdate:
        """Normaliza los campos del formulario o lanza :class:`ValidationError`."""

        first_name, last_name, email = first_name.strip(), last_name.strip(), email.strip()
        if not first_name or not last_name or not email:
            raise ValidationError("Nombre, apellido y correo son obligatorios.")
        if "@" not in email:
            raise ValidationError("El correo no es válido.")
        return UserUpdate(first_name=first_name, last_name=last_name, email=email)

    def save(self, original: User, first_name: str, last_name: str, email: str) -> OperationResult:
        """Envía los cambios; el usuario devuelto refleja los nuevos valores."""

        cambios = self.validar(first_name, last_name, email)
        try:
            self._repository.update_user(original.id, cambios)
        except NetworkError as exc:
            logger.warning("Error actualizando el usuario %s: %s", original.id, exc)
            return OperationResult(ok=False, message=self.SAVE_ERROR)

        actualizado = User(
            id=original.id,
            email=cambios.email or original.email,
            first_name=cambios.first_name or original.first_name,
            last_name=cambios.last_name or original.last_name,
            avatar=original.avatar,
        )
        logger.info("Usuario %s actualizado", original.id)
        return OperationResult(ok=True, message=self.SAVE_OK, user=actualizado)


__all__ = ["AuthService", "OperationResult", "UserEditService", "ValidationError"]
