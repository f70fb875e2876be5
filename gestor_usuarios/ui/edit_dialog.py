"""Formulario de edición de un usuario."""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import QTimer
from PyQt6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
)

from gestor_usuarios.core.services import UserEditService, ValidationError
from gestor_usuarios.models.user import User


class EditUserDialog(QDialog):
    """Carga el usuario, permite modificarlo y se cierra tras guardar."""

    def __init__(
        self,
        user_id: int,
        edit_service: UserEditService,
        *,
        redirect_ms: int = 2000,
        parent=None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Editar usuario")
        self.setModal(True)
        self.setMinimumWidth(400)
        self._edit_service = edit_service
        self._redirect_ms = redirect_ms
        self._original: Optional[User] = None
        self.updated_user: Optional[User] = None

        self._lbl_message = QLabel("")
        self._lbl_message.setWordWrap(True)
        self._lbl_message.setVisible(False)

        self._input_first = QLineEdit()
        self._input_last = QLineEdit()
        self._input_email = QLineEdit()

        self._btn_save = QPushButton("Guardar")
        self._btn_save.clicked.connect(self._on_save)
        self._btn_cancel = QPushButton("Cancelar")
        self._btn_cancel.clicked.connect(self.reject)

        form = QFormLayout()
        form.addRow("Nombre", self._input_first)
        form.addRow("Apellido", self._input_last)
        form.addRow("Correo", self._input_email)

        buttons = QDialogButtonBox()
        buttons.addButton(self._btn_save, QDialogButtonBox.ButtonRole.AcceptRole)
        buttons.addButton(self._btn_cancel, QDialogButtonBox.ButtonRole.RejectRole)

        layout = QVBoxLayout()
        layout.addWidget(self._lbl_message)
        layout.addLayout(form)
        layout.addWidget(buttons)
        self.setLayout(layout)

        self._load(user_id)

    def _load(self, user_id: int) -> None:
        resultado = self._edit_service.load(user_id)
        if not resultado.ok or resultado.user is None:
            self._show_message(resultado.message or "Usuario no encontrado.", error=True)
            self._btn_save.setEnabled(False)
            return

        self._original = resultado.user
        self._input_first.setText(resultado.user.first_name)
        self._input_last.setText(resultado.user.last_name)
        self._input_email.setText(resultado.user.email)

    def _on_save(self) -> None:
        if self._original is None:
            return
        self._show_message("")
        self._btn_save.setEnabled(False)
        try:
            resultado = self._edit_service.save(
                self._original,
                self._input_first.text(),
                self._input_last.text(),
                self._input_email.text(),
            )
        except ValidationError as exc:
            self._show_message(str(exc), error=True)
            self._btn_save.setEnabled(True)
            return

        if not resultado.ok:
            self._show_message(resultado.message, error=True)
            self._btn_save.setEnabled(True)
            return

        self.updated_user = resultado.user
        self._show_message(resultado.message, error=False)
        QTimer.singleShot(self._redirect_ms, self.accept)

    def _show_message(self, message: str, *, error: bool = False) -> None:
        color = "#b91c1c" if error else "#15803d"
        self._lbl_message.setStyleSheet(f"color: {color}; font-weight: 600;")
        self._lbl_message.setText(message)
        self._lbl_message.setVisible(bool(message))


__all__ = ["EditUserDialog"]
