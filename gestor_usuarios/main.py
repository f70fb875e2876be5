"""Punto de entrada de la aplicación.

Crea los componentes de infraestructura, servicios y estado, pide las
credenciales si no hay una sesión guardada y arranca la ventana principal.
"""

from __future__ import annotations

import logging
import sys

from PyQt6.QtWidgets import QApplication, QDialog

from gestor_usuarios.config import AppConfig, configure_logging
from gestor_usuarios.core.notifications import NotificationCenter
from gestor_usuarios.core.services import AuthService, UserEditService
from gestor_usuarios.core.session import SessionContext
from gestor_usuarios.core.synchronizer import ListSynchronizer
from gestor_usuarios.infrastructure.api_client import APIClient
from gestor_usuarios.infrastructure.repositories import UserRepository
from gestor_usuarios.infrastructure.storage import JsonFileStorage
from gestor_usuarios.ui.login_dialog import LoginDialog
from gestor_usuarios.ui.main_window import MainWindow
from gestor_usuarios.ui.qt_support import QtScheduler, QtThreadRunner

logger = logging.getLogger(__name__)


def main() -> None:
    """Arranca la aplicación PyQt6 con las dependencias configuradas."""

    config = AppConfig.from_env()
    configure_logging(config.log_level)

    app = QApplication(sys.argv)
    app.setStyle("Fusion")

    session = SessionContext(JsonFileStorage(config.storage_path))
    api_client = APIClient(config, session)
    repository = UserRepository(api_client)
    auth_service = AuthService(repository, session)
    edit_service = UserEditService(repository)
    notifications = NotificationCenter(QtScheduler(app), delay_ms=config.list_notification_ms)
    synchronizer = ListSynchronizer(repository, notifications, runner=QtThreadRunner(app))

    def _request_login() -> bool:
        login = LoginDialog(auth_service)
        return login.exec() == QDialog.DialogCode.Accepted and auth_service.is_authenticated

    def _logout() -> None:
        auth_service.logout()
        window.hide()
        if not _request_login():
            app.quit()
            return
        window.show()
        window.start()

    if not auth_service.is_authenticated and not _request_login():
        sys.exit(0)

    window = MainWindow(
        synchronizer=synchronizer,
        notifications=notifications,
        edit_service=edit_service,
        on_logout=_logout,
        edit_redirect_ms=config.edit_redirect_ms,
    )
    window.show()
    window.start()
    logger.info("Aplicación iniciada contra %s", config.api_base)

    sys.exit(app.exec())


if __name__ == "__main__":  # pragma: no cover - punto de entrada interactivo
    main()
