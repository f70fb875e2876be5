"""Ventana principal de la aplicación."""

from __future__ import annotations

from typing import Callable, Optional

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from gestor_usuarios.core.notifications import Notification, NotificationCenter
from gestor_usuarios.core.services import UserEditService
from gestor_usuarios.core.state import ListState
from gestor_usuarios.core.synchronizer import ListSynchronizer
from gestor_usuarios.core.visibility import BoundaryTrigger
from gestor_usuarios.models.user import User
from gestor_usuarios.ui.edit_dialog import EditUserDialog

# Distancia en píxeles al final del listado que cuenta como "cerca del final".
NEAR_BOTTOM_PX = 40


class UserCard(QFrame):
    """Tarjeta con los datos de un usuario y sus acciones."""

    def __init__(
        self,
        usuario: User,
        on_edit: Callable[[int], None],
        on_delete: Callable[[int], None],
    ) -> None:
        super().__init__()
        self.setObjectName("userCard")
        self.usuario = usuario

        iniciales = (usuario.first_name[:1] + usuario.last_name[:1]).upper() or "?"
        avatar = QLabel(iniciales)
        avatar.setObjectName("avatar")
        avatar.setFixedSize(48, 48)
        avatar.setAlignment(Qt.AlignmentFlag.AlignCenter)
        avatar.setToolTip(usuario.avatar)

        nombre = QLabel(usuario.full_name)
        nombre.setStyleSheet("font-weight: 700; font-size: 11pt;")
        email = QLabel(usuario.email)
        email.setStyleSheet("color: #4b5563;")

        datos = QVBoxLayout()
        datos.addWidget(nombre)
        datos.addWidget(email)

        btn_edit = QPushButton("Editar")
        btn_edit.clicked.connect(lambda: on_edit(usuario.id))
        btn_delete = QPushButton("Eliminar")
        btn_delete.setObjectName("danger")
        btn_delete.clicked.connect(lambda: on_delete(usuario.id))

        layout = QHBoxLayout()
        layout.addWidget(avatar)
        layout.addLayout(datos, 1)
        layout.addWidget(btn_edit)
        layout.addWidget(btn_delete)
        self.setLayout(layout)


class MainWindow(QMainWindow):
    """Ventana principal con el listado incremental de usuarios."""

    def __init__(
        self,
        *,
        synchronizer: ListSynchronizer,
        notifications: NotificationCenter,
        edit_service: UserEditService,
        on_logout: Callable[[], None],
        edit_redirect_ms: int = 2000,
    ) -> None:
        super().__init__()
        self.synchronizer = synchronizer
        self.notifications = notifications
        self.edit_service = edit_service
        self._on_logout = on_logout
        self._edit_redirect_ms = edit_redirect_ms
        self._boundary = BoundaryTrigger(self.synchronizer.on_boundary_crossed)

        self.setWindowTitle("Gestión de usuarios")
        self.resize(720, 560)

        self.search_box = QLineEdit(placeholderText="Buscar por nombre o email")
        self.search_box.textChanged.connect(self.synchronizer.set_search_term)

        self.refresh_button = QPushButton("Recargar")
        self.refresh_button.clicked.connect(self.synchronizer.reload)

        self.logout_button = QPushButton("Cerrar sesión")
        self.logout_button.setObjectName("danger")
        self.logout_button.clicked.connect(self._handle_logout)

        self.notification_label = QLabel("")
        self.notification_label.setVisible(False)

        self.error_label = QLabel("")
        self.error_label.setObjectName("errorBanner")
        self.error_label.setVisible(False)

        self.loading_label = QLabel("Cargando usuarios...")
        self.loading_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.loading_label.setVisible(False)

        self.empty_label = QLabel("No hay usuarios para mostrar.")
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.empty_label.setVisible(False)

        self.cards_layout = QVBoxLayout()
        self.cards_layout.setSpacing(10)
        cards_container = QWidget()
        cards_outer = QVBoxLayout()
        cards_outer.addLayout(self.cards_layout)
        cards_outer.addWidget(self.empty_label)
        cards_outer.addWidget(self.loading_label)
        cards_outer.addStretch(1)
        cards_container.setLayout(cards_outer)

        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(True)
        self.scroll_area.setWidget(cards_container)
        scroll_bar = self.scroll_area.verticalScrollBar()
        scroll_bar.valueChanged.connect(self._check_boundary)
        scroll_bar.rangeChanged.connect(lambda *_: self._check_boundary())

        top_bar = QHBoxLayout()
        top_bar.addWidget(QLabel("Usuarios"))
        top_bar.addStretch(1)
        top_bar.addWidget(self.search_box)
        top_bar.addWidget(self.refresh_button)
        top_bar.addWidget(self.logout_button)

        layout = QVBoxLayout()
        layout.addLayout(top_bar)
        layout.addWidget(self.notification_label)
        layout.addWidget(self.error_label)
        layout.addWidget(self.scroll_area)

        container = QWidget()
        container.setLayout(layout)
        self.setCentralWidget(container)
        self._apply_styles()

        self.synchronizer.subscribe(self._render)
        self.notifications.subscribe(self._render_notification)

    # ------------------------------------------------------------------
    # Eventos y acciones
    # ------------------------------------------------------------------
    def start(self) -> None:
        self.search_box.blockSignals(True)
        self.search_box.clear()
        self.search_box.blockSignals(False)
        self.synchronizer.mount()

    def _check_boundary(self, *_args) -> None:
        bar = self.scroll_area.verticalScrollBar()
        visible = bar.maximum() - bar.value() <= NEAR_BOTTOM_PX
        self._boundary.update(visible)

    def _handle_edit(self, user_id: int) -> None:
        dialog = EditUserDialog(
            user_id,
            self.edit_service,
            redirect_ms=self._edit_redirect_ms,
            parent=self,
        )
        if dialog.exec() and dialog.updated_user is not None:
            self.synchronizer.apply_update(dialog.updated_user)

    def _handle_delete(self, user_id: int) -> None:
        respuesta = QMessageBox.question(
            self,
            "Eliminar usuario",
            "¿Seguro que deseas eliminar este usuario?",
        )
        if respuesta != QMessageBox.StandardButton.Yes:
            return
        self.synchronizer.delete(user_id)

    def _handle_logout(self) -> None:
        self.notifications.clear()
        self._on_logout()

    # ------------------------------------------------------------------
    # Renderizado
    # ------------------------------------------------------------------
    def _render(self, state: ListState) -> None:
        self._clear_cards()
        usuarios = state.filtered_view
        for usuario in usuarios:
            card = UserCard(usuario, self._handle_edit, self._handle_delete)
            self.cards_layout.addWidget(card)

        self.loading_label.setVisible(state.loading)
        self.empty_label.setVisible(not state.loading and not usuarios)
        self.error_label.setText(state.error)
        self.error_label.setVisible(bool(state.error))

        if not state.loading and not state.error:
            # El centinela cambió: se vuelve a evaluar cuando Qt termine el layout.
            # Tras un error se espera a que el usuario vuelva a desplazarse.
            self._boundary.rearm()
            QTimer.singleShot(0, self._check_boundary)

    def _clear_cards(self) -> None:
        while self.cards_layout.count():
            item = self.cards_layout.takeAt(0)
            widget = item.widget() if item is not None else None
            if widget is not None:
                widget.deleteLater()

    def _render_notification(self, notification: Optional[Notification]) -> None:
        if notification is None:
            self.notification_label.clear()
            self.notification_label.setVisible(False)
            return
        style = (
            "background: #dcfce7; color: #15803d;"
            if notification.kind == "success"
            else "background: #fee2e2; color: #b91c1c;"
        )
        self.notification_label.setStyleSheet(f"{style} padding: 8px; border-radius: 6px;")
        self.notification_label.setText(notification.message)
        self.notification_label.setVisible(True)

    def _apply_styles(self) -> None:
        self.setStyleSheet(
            """
            #userCard {
                background: #fff;
                border: 1px solid #e5e7eb;
                border-radius: 10px;
            }
            #avatar {
                background: #dbeafe;
                color: #1e3a8a;
                border-radius: 24px;
                font-weight: 700;
            }
            #errorBanner {
                background: #fee2e2;
                color: #b91c1c;
                padding: 8px;
                border-radius: 6px;
            }
            QPushButton {
                background: #2563eb;
                color: #fff;
                border: none;
                border-radius: 6px;
                padding: 6px 12px;
            }
            QPushButton#danger {
                background: #ef4444;
            }
            """
        )


__all__ = ["MainWindow", "UserCard"]
