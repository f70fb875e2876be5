"""Estado del listado incremental de usuarios."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from gestor_usuarios.models.user import User


def filter_users(usuarios: List[User], consulta: str) -> List[User]:
    """Filtra por nombre, apellido o correo sin distinguir mayúsculas.

    Conserva el orden de entrada; con una consulta vacía devuelve todos.
    """

    consulta_normalizada = consulta.strip().lower()
    if not consulta_normalizada:
        return list(usuarios)

    return [
        usuario
        for usuario in usuarios
        if consulta_normalizada in usuario.first_name.lower()
        or consulta_normalizada in usuario.last_name.lower()
        or consulta_normalizada in usuario.email.lower()
    ]


@dataclass
class ListState:
    """Mantiene los usuarios acumulados, la paginación y la búsqueda."""

    accumulated: List[User] = field(default_factory=list)
    current_page: int = 1
    total_pages: int = 0
    has_more: bool = True
    search_term: str = ""
    loading: bool = False
    error: str = ""

    @property
    def filtered_view(self) -> List[User]:
        return filter_users(self.accumulated, self.search_term)

    def ids(self) -> set[int]:
        return {usuario.id for usuario in self.accumulated}


__all__ = ["ListState", "filter_users"]
