"""Configuración de la aplicación.

Los valores por defecto viven como atributos de clase; cualquiera puede
sobrescribirse con variables de entorno ``GESTOR_*``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _default_storage_path() -> Path:
    return Path.home() / ".gestor_usuarios" / "storage.json"


@dataclass(slots=True)
class AppConfig:
    """Parámetros de conexión y de comportamiento de la interfaz."""

    API_BASE = "https://reqres.in/api"

    api_base: str = API_BASE
    timeout: float = 15
    list_notification_ms: int = 3000
    edit_redirect_ms: int = 2000
    storage_path: Path = field(default_factory=_default_storage_path)
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        self.api_base = self.api_base.rstrip("/")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """Construye la configuración leyendo las variables ``GESTOR_*``."""

        env = os.environ if environ is None else environ
        config = cls()

        api_base = env.get("GESTOR_API_BASE", "").strip()
        if api_base:
            config.api_base = api_base.rstrip("/")

        timeout_text = env.get("GESTOR_TIMEOUT", "").strip()
        if timeout_text:
            try:
                config.timeout = float(timeout_text)
            except ValueError:
                logger.warning("GESTOR_TIMEOUT inválido (%r); se usa %s", timeout_text, config.timeout)

        storage = env.get("GESTOR_STORAGE", "").strip()
        if storage:
            config.storage_path = Path(storage).expanduser()

        level = env.get("GESTOR_LOG_LEVEL", "").strip()
        if level:
            config.log_level = level.upper()

        return config


def configure_logging(level: str = "INFO") -> None:
    """Configura el logging raíz con un formato común."""

    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO
    logging.basicConfig(level=numeric, format=LOG_FORMAT)


__all__ = ["AppConfig", "LOG_FORMAT", "configure_logging"]
