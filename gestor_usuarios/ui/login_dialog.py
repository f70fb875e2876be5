"""Diálogo de inicio de sesión."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
)

from gestor_usuarios.core.services import AuthService, ValidationError


class LoginDialog(QDialog):
    """Pantalla modal de login contra el endpoint ``/login``."""

    def __init__(self, auth_service: AuthService, parent=None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Autenticación requerida")
        self.setModal(True)
        self._auth_service = auth_service

        self._lbl_status = QLabel("")
        self._lbl_status.setObjectName("statusLabel")
        self._lbl_status.setWordWrap(True)
        self._lbl_status.setVisible(False)

        self._input_email = QLineEdit()
        self._input_email.setPlaceholderText("correo@ejemplo.com")

        self._input_password = QLineEdit()
        self._input_password.setPlaceholderText("contraseña")
        self._input_password.setEchoMode(QLineEdit.EchoMode.Password)
        self._input_password.returnPressed.connect(self._on_submit)

        self._btn_login = QPushButton("Ingresar")
        self._btn_login.clicked.connect(self._on_submit)

        self._btn_cancel = QPushButton("Cancelar")
        self._btn_cancel.clicked.connect(self.reject)

        self._build_ui()
        self._input_email.setFocus()

    def _build_ui(self) -> None:
        title_box = QVBoxLayout()
        title = QLabel("Gestión de usuarios")
        title.setStyleSheet("font-size: 15pt; font-weight: 700; color: #1e3a8a;")
        subtitle = QLabel("Usa tus credenciales para continuar")
        subtitle.setStyleSheet("color: #1d4ed8; font-weight: 500;")
        title_box.addWidget(title)
        title_box.addWidget(subtitle)

        form = QFormLayout()
        form.setLabelAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        form.addRow("Correo", self._input_email)
        form.addRow("Contraseña", self._input_password)

        buttons = QDialogButtonBox()
        buttons.addButton(self._btn_login, QDialogButtonBox.ButtonRole.AcceptRole)
        buttons.addButton(self._btn_cancel, QDialogButtonBox.ButtonRole.RejectRole)

        layout = QVBoxLayout()
        layout.setSpacing(16)
        layout.setContentsMargins(20, 18, 20, 16)
        layout.addLayout(title_box)
        layout.addLayout(form)
        layout.addWidget(buttons)

        status_layout = QHBoxLayout()
        status_layout.addWidget(self._lbl_status)
        status_layout.addStretch(1)
        layout.addLayout(status_layout)

        self.setLayout(layout)
        self.setMinimumWidth(420)
        self._apply_styles()

    def _on_submit(self) -> None:
        self._show_status("")
        self._btn_login.setEnabled(False)
        try:
            resultado = self._auth_service.login(
                self._input_email.text(), self._input_password.text()
            )
        except ValidationError as exc:
            self._show_status(str(exc))
            return
        finally:
            self._btn_login.setEnabled(True)

        if not resultado.ok:
            self._show_status(resultado.message)
            return
        self.accept()

    def _show_status(self, message: str) -> None:
        self._lbl_status.setText(message)
        self._lbl_status.setToolTip(message)
        self._lbl_status.setVisible(bool(message))

    def _apply_styles(self) -> None:
        self.setStyleSheet(
            """
            QDialog {
                background-color: #eff6ff;
                color: #1e3a8a;
                font-family: 'Segoe UI', 'Open Sans', sans-serif;
                font-size: 9pt;
            }
            QLineEdit {
                border: 1px solid #93c5fd;
                border-radius: 8px;
                padding: 8px 10px;
                background: #fff;
            }
            QLineEdit:focus {
                border: 2px solid #2563eb;
            }
            QPushButton {
                background: #2563eb;
                color: #fff;
                border: none;
                border-radius: 10px;
                padding: 9px 16px;
                font-weight: 700;
            }
            QPushButton:hover {
                background: #1d4ed8;
            }
            QPushButton:disabled {
                background: #bfdbfe;
                color: #1e40af;
            }
            #statusLabel {
                color: #b91c1c;
                font-weight: 600;
            }
            """
        )


__all__ = ["LoginDialog"]
