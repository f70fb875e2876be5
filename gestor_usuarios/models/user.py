"""Definiciones de modelos de dominio."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple


@dataclass(frozen=True, slots=True)
class User:
    """Usuario tal como lo devuelve el servicio remoto."""

    id: int
    email: str
    first_name: str
    last_name: str
    avatar: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_api(cls, datos: Mapping[str, Any]) -> "User":
        """Crea un usuario a partir del diccionario del API (claves snake_case)."""

        return cls(
            id=int(datos["id"]),
            email=str(datos.get("email") or ""),
            first_name=str(datos.get("first_name") or ""),
            last_name=str(datos.get("last_name") or ""),
            avatar=str(datos.get("avatar") or ""),
        )


@dataclass(frozen=True, slots=True)
class Page:
    """Un lote de usuarios con sus metadatos de paginación."""

    page_number: int
    per_page: int
    total: int
    total_pages: int
    items: Tuple[User, ...] = ()

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "Page":
        usuarios = tuple(User.from_api(datos) for datos in payload.get("data") or ())
        return cls(
            page_number=int(payload.get("page", 1)),
            per_page=int(payload.get("per_page", len(usuarios))),
            total=int(payload.get("total", len(usuarios))),
            total_pages=int(payload.get("total_pages", 1)),
            items=usuarios,
        )


@dataclass(frozen=True, slots=True)
class UserUpdate:
    """Campos editables de un usuario; sólo se envían los indicados."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None

    def to_payload(self) -> dict:
        campos = {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
        }
        return {clave: valor for clave, valor in campos.items() if valor is not None}


__all__ = ["Page", "User", "UserUpdate"]
