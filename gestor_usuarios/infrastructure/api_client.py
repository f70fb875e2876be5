"""Cliente HTTP del servicio remoto de usuarios.

Encapsula las peticiones JSON contra el API paginado. Todas las fallas de
transporte, respuestas fuera del rango 2xx y cuerpos que no son JSON se
reportan como :class:`NetworkError`.
"""

from __future__ import annotations

import json
import logging
import socket
from dataclasses import dataclass
from typing import Any, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from gestor_usuarios.config import AppConfig
from gestor_usuarios.core.session import SessionContext

logger = logging.getLogger(__name__)


class NetworkError(Exception):
    """Falla de red o respuesta no exitosa del servicio remoto."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


@dataclass(frozen=True, slots=True)
class APIResponse:
    status: int
    body: Any = None


class APIClient:
    """Provee acceso HTTP a los recursos ``/users`` y ``/login``."""

    def __init__(self, config: AppConfig, session: SessionContext) -> None:
        self._config = config
        self._session = session

    @property
    def api_base(self) -> str:
        return self._config.api_base

    # ------------------------------------------------------------------
    # Transporte
    # ------------------------------------------------------------------
    def _headers(self) -> dict:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        token = self._session.token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def request(self, method: str, path: str, payload: Optional[dict] = None) -> APIResponse:
        """Ejecuta una petición y devuelve el estado y el cuerpo decodificado."""

        url = f"{self.api_base}/{path.lstrip('/')}"
        data = json.dumps(payload).encode("utf-8") if payload is not None else None
        request = Request(url, data=data, method=method, headers=self._headers())
        logger.debug("%s %s", method, url)

        try:
            with urlopen(request, timeout=self._config.timeout) as response:
                status = response.status
                raw = response.read()
        except HTTPError as exc:
            raise NetworkError(f"Error HTTP {exc.code} en {method} {url}.", status=exc.code) from exc
        except URLError as exc:
            if isinstance(exc.reason, socket.timeout):
                raise NetworkError(f"La petición {method} {url} expiró por timeout.") from exc
            raise NetworkError(f"No se pudo conectar al servicio: {exc.reason}.") from exc
        except TimeoutError as exc:
            raise NetworkError(f"La petición {method} {url} expiró por timeout.") from exc
        except OSError as exc:
            raise NetworkError(f"Conexión interrumpida en {method} {url} ({exc}).") from exc

        if not 200 <= status < 300:
            raise NetworkError(f"Respuesta inesperada {status} en {method} {url}.", status=status)

        if not raw:
            return APIResponse(status=status)
        try:
            body = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise NetworkError(f"Respuesta de {url} no es JSON válido.", status=status) from exc
        return APIResponse(status=status, body=body)

    def _expect_object(self, response: APIResponse, recurso: str) -> dict:
        if not isinstance(response.body, dict):
            raise NetworkError(f"Formato inesperado al leer {recurso}.", status=response.status)
        return response.body

    # ------------------------------------------------------------------
    # Recursos
    # ------------------------------------------------------------------
    def login(self, email: str, password: str) -> str:
        """Autentica contra ``/login`` y devuelve el token emitido."""

        response = self.request("POST", "login", {"email": email, "password": password})
        body = self._expect_object(response, "login")
        token = body.get("token")
        if not token:
            raise NetworkError("El servicio no devolvió un token.", status=response.status)
        return str(token)

    def obtener_usuarios(self, page: int = 1) -> dict:
        """Recupera una página cruda de usuarios."""

        response = self.request("GET", f"users?{urlencode({'page': page})}")
        return self._expect_object(response, "usuarios")

    def obtener_usuario(self, user_id: int) -> dict:
        response = self.request("GET", f"users/{user_id}")
        body = self._expect_object(response, "usuario")
        datos = body.get("data")
        if not isinstance(datos, dict):
            raise NetworkError("Formato inesperado al leer usuario.", status=response.status)
        return datos

    def actualizar_usuario(self, user_id: int, campos: dict) -> dict:
        response = self.request("PUT", f"users/{user_id}", campos)
        return response.body if isinstance(response.body, dict) else {}

    def eliminar_usuario(self, user_id: int) -> bool:
        """Elimina un usuario; el servicio confirma con HTTP 204."""

        response = self.request("DELETE", f"users/{user_id}")
        return response.status == 204


__all__ = ["APIClient", "APIResponse", "NetworkError"]
