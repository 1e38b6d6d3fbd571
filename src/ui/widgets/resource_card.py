# src/ui/widgets/resource_card.py
from __future__ import annotations

from typing import Any, Callable, Optional

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QFrame, QDialog, QMessageBox
)
from PySide6.QtCore import Qt

from src.api.client import ApiClient
from src.core.models import COLOR_HEX, Resource, type_color
from src.ui.approval import ApprovalGate
from src.ui.auth.identity import Identity
from src.ui.role_resolver import RoleResolver
from src.ui.tasks import LivenessToken, TaskRunner
from src.ui.widgets.toast import Notifier


def _tag(text: str, color: str) -> QLabel:
    t = QLabel(text or "—")
    t.setStyleSheet(
        f"background:{COLOR_HEX.get(color, COLOR_HEX['blue'])}; color:white;"
        "border-radius:4px; padding:2px 8px; font-weight:600;"
    )
    return t


def _divider() -> QFrame:
    line = QFrame()
    line.setFrameShape(QFrame.HLine)
    line.setFrameShadow(QFrame.Sunken)
    return line


class ResourceCard(QWidget):
    """
    One resource + its actions.

    - Edit / Delete buttons exist only when can_edit / can_delete is True
    - Delete asks for confirmation before calling on_delete()
    - Approve button is visible only for a resolved superAdmin on a pending resource
    """
    def __init__(
        self,
        resource: Resource,
        identity: Identity,
        client: ApiClient,
        can_edit: bool = False,
        can_delete: bool = False,
        on_edit: Optional[Callable[[], None]] = None,
        on_delete: Optional[Callable[[], None]] = None,
        on_approved: Optional[Callable[[Any], None]] = None,
        notifier: Notifier | None = None,
        runner: TaskRunner | None = None,
        confirm: Optional[Callable[[], bool]] = None,
        parent=None,
    ):
        super().__init__(parent)
        self._resource = resource
        self._on_edit = on_edit
        self._on_delete = on_delete
        self._on_approved = on_approved
        self._confirm = confirm or self._confirm_delete

        self.token = LivenessToken()
        runner = runner or TaskRunner(self)
        self.notifier = notifier or Notifier(parent=self)

        self.resolver = RoleResolver(client, identity, runner=runner, token=self.token, parent=self)
        self.approval = ApprovalGate(client, self.notifier, runner=runner, parent=self)

        layout = QVBoxLayout(self)
        layout.setSpacing(12)

        # ---------- Header ----------
        self.title = QLabel()
        self.title.setStyleSheet("font-size:20px;font-weight:800;")
        self.title.setWordWrap(True)
        layout.addWidget(self.title)

        self.image = QLabel()
        self.image.setStyleSheet("color:#9a9a9a;")
        self.image.setWordWrap(True)
        layout.addWidget(self.image)

        # ---------- Tags ----------
        self.tags_row = QHBoxLayout()
        self.tags_row.setSpacing(6)
        layout.addLayout(self.tags_row)

        self.date = QLabel()
        self.date.setStyleSheet("font-weight:700;")
        layout.addWidget(self.date)

        # ---------- Description ----------
        desc_title = QLabel("Description")
        desc_title.setStyleSheet("font-size:15px;font-weight:700;")
        layout.addWidget(desc_title)

        self.description = QLabel()
        self.description.setWordWrap(True)
        self.description.setTextInteractionFlags(Qt.TextSelectableByMouse)
        layout.addWidget(self.description)

        layout.addWidget(_divider())

        # ---------- Details ----------
        details_title = QLabel("Resource Details")
        details_title.setStyleSheet("font-size:15px;font-weight:700;")
        layout.addWidget(details_title)

        self.details = QLabel()
        layout.addWidget(self.details)

        self.creator = QLabel()
        layout.addWidget(self.creator)

        # ---------- Approve (superAdmin) ----------
        self.approve_btn = QPushButton("Approve Resource")
        self.approve_btn.setObjectName("approveButton")
        self.approve_btn.setStyleSheet("background:#38a169;color:white;font-weight:700;padding:6px;")
        self.approve_btn.clicked.connect(self.approve)
        self.approve_btn.setVisible(False)
        layout.addWidget(self.approve_btn)

        # ---------- Edit / Delete ----------
        self.edit_btn = None
        self.delete_btn = None
        if can_edit or can_delete:
            actions = QHBoxLayout()
            if can_edit:
                self.edit_btn = QPushButton("Edit Resource")
                self.edit_btn.setObjectName("editButton")
                self.edit_btn.clicked.connect(self._edit_clicked)
                actions.addWidget(self.edit_btn)
            if can_delete:
                self.delete_btn = QPushButton("Delete")
                self.delete_btn.setObjectName("deleteButton")
                self.delete_btn.setStyleSheet("color:#e53e3e;")
                self.delete_btn.clicked.connect(self._delete_clicked)
                actions.addWidget(self.delete_btn)
            layout.addLayout(actions)

        layout.addStretch()

        self.resolver.role_changed.connect(self._sync_approve)
        self._render()
        self.resolver.start()

    # ---------------------------
    # State
    # ---------------------------
    @property
    def resource(self) -> Resource:
        return self._resource

    @property
    def role(self) -> Optional[str]:
        return self.resolver.role

    def can_approve(self) -> bool:
        return ApprovalGate.is_visible(self.role, self._resource)

    def set_resource(self, resource: Resource):
        """Re-render with refetched data."""
        if not self.token.alive:
            return
        self._resource = resource
        self._render()

    def _render(self):
        r = self._resource
        self.title.setText(r.title or "Untitled resource")
        self.image.setText(r.image_url or "No Image Available")

        while self.tags_row.count():
            item = self.tags_row.takeAt(0)
            if item.widget():
                item.widget().deleteLater()
        self.tags_row.addWidget(_tag(r.type, type_color(r.type)))
        self.tags_row.addWidget(_tag(r.subject, "blue"))
        self.tags_row.addWidget(_tag(r.age_group, "green"))
        self.status_badge = _tag(r.status_label(), "green" if r.is_approved else "orange")
        self.tags_row.addWidget(self.status_badge)
        self.tags_row.addStretch()

        self.date.setText(r.event_date_label())
        self.description.setText(r.description)
        self.details.setText(
            f"Type: {r.type or '—'}    Subject: {r.subject or '—'}    Age Group: {r.age_group or '—'}"
        )

        self.creator.setVisible(r.user_id is not None)
        self.creator.setText(f"Created by: {r.creator_label()}")

        self._sync_approve()

    def _sync_approve(self, _role=None):
        self.approve_btn.setVisible(self.can_approve())

    # ---------------------------
    # Actions
    # ---------------------------
    def approve(self):
        self.approval.approve(self._resource.id, on_approved=self._on_approved, token=self.token)

    def _edit_clicked(self):
        if self._on_edit is not None:
            self._on_edit()

    def _delete_clicked(self):
        if not self._confirm():
            return
        if self._on_delete is not None:
            self._on_delete()

    def _confirm_delete(self) -> bool:
        title = self._resource.title or "this resource"
        return QMessageBox.question(
            self, "Confirm", f"Delete {title}?\nThis cannot be undone."
        ) == QMessageBox.Yes

    def dispose(self):
        self.token.cancel()

    def closeEvent(self, event):
        self.dispose()
        super().closeEvent(event)


class ResourceModal(QDialog):
    def __init__(self, resource: Resource, identity: Identity, client: ApiClient, parent=None, **card_kwargs):
        super().__init__(parent)
        self.setWindowTitle(resource.title or "Resource")
        self.setMinimumWidth(560)

        layout = QVBoxLayout(self)
        self.card = ResourceCard(resource, identity, client, parent=self, **card_kwargs)
        layout.addWidget(self.card)

        btns = QHBoxLayout()
        btns.addStretch()
        self.close_btn = QPushButton("Close")
        self.close_btn.clicked.connect(self.accept)
        btns.addWidget(self.close_btn)
        layout.addLayout(btns)

        self.finished.connect(lambda *_: self.card.dispose())
