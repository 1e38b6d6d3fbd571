# src/ui/pages/resources.py
from __future__ import annotations

import logging
from dataclasses import replace

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QTableWidget, QTableWidgetItem, QDialog, QFormLayout,
    QLineEdit, QComboBox, QPlainTextEdit, QDateEdit, QMessageBox
)
from PySide6.QtCore import QDate

from src.api.client import ApiClient
from src.api.resources_api import list_resources, update_resource, delete_resource
from src.core.models import TYPE_COLORS, Resource, parse_date
from src.core.permissions import is_owner
from src.ui.auth.identity import Identity
from src.ui.signals import signals
from src.ui.tasks import TaskRunner
from src.ui.widgets.resource_card import ResourceModal
from src.ui.widgets.toast import Notifier

log = logging.getLogger(__name__)

NO_DATE = QDate(1900, 1, 1)


class EditResourceDialog(QDialog):
    def __init__(self, resource: Resource, parent=None):
        super().__init__(parent)
        self.resource = resource
        self.setWindowTitle("Edit Resource")
        self.setMinimumWidth(480)

        layout = QVBoxLayout(self)
        form = QFormLayout()

        self.title = QLineEdit(resource.title)

        self.type = QComboBox()
        self.type.setEditable(True)
        self.type.addItems(list(TYPE_COLORS))
        self.type.setCurrentText(resource.type)

        self.subject = QLineEdit(resource.subject)
        self.age_group = QLineEdit(resource.age_group)

        self.event_date = QDateEdit()
        self.event_date.setCalendarPopup(True)
        self.event_date.setDisplayFormat("yyyy-MM-dd")
        # minimum date doubles as "not set"
        self.event_date.setMinimumDate(NO_DATE)
        self.event_date.setSpecialValueText("Not set")
        dt = parse_date(resource.event_date)
        self._initial_date = QDate(dt.year, dt.month, dt.day) if dt else NO_DATE
        self.event_date.setDate(self._initial_date)

        self.image_url = QLineEdit(resource.image_url)
        self.image_url.setPlaceholderText("Optional image URL")

        self.description = QPlainTextEdit(resource.description)

        form.addRow("Title", self.title)
        form.addRow("Type", self.type)
        form.addRow("Subject", self.subject)
        form.addRow("Age Group", self.age_group)
        form.addRow("Event Date", self.event_date)
        form.addRow("Image URL", self.image_url)
        form.addRow("Description", self.description)
        layout.addLayout(form)

        btns = QHBoxLayout()
        btns.addStretch()
        self.cancel_btn = QPushButton("Cancel")
        self.save_btn = QPushButton("Save")
        btns.addWidget(self.cancel_btn)
        btns.addWidget(self.save_btn)
        layout.addLayout(btns)

        self.cancel_btn.clicked.connect(self.reject)
        self.save_btn.clicked.connect(self.on_save)

    def on_save(self):
        if not self.title.text().strip():
            QMessageBox.warning(self, "Missing", "Title is required.")
            return
        self._data = replace(
            self.resource,
            title=self.title.text().strip(),
            type=self.type.currentText().strip(),
            subject=self.subject.text().strip(),
            age_group=self.age_group.text().strip(),
            event_date=self._event_date_value(),
            image_url=self.image_url.text().strip(),
            description=self.description.toPlainText().strip(),
        ).to_payload()
        self.accept()

    def _event_date_value(self) -> str:
        picked = self.event_date.date()
        if picked == self._initial_date:
            # untouched: keep the server value as-is (may be empty or carry a time)
            return self.resource.event_date
        if picked == NO_DATE:
            return ""
        return picked.toString("yyyy-MM-dd")

    @property
    def data(self):
        return getattr(self, "_data", None)


class ResourcesPage(QWidget):
    """
    Resource list. Double click opens the card in a modal.
    Owners get Edit / Delete; approval is decided inside the card.
    """
    def __init__(self, identity: Identity, client: ApiClient, notifier: Notifier | None = None,
                 runner: TaskRunner | None = None, parent=None):
        super().__init__(parent)
        self.identity = identity
        self.client = client
        self.notifier = notifier or Notifier(parent=self)
        self.runner = runner or TaskRunner(self)

        self._resources: list[Resource] = []
        self._modal: ResourceModal | None = None

        layout = QVBoxLayout(self)

        title_row = QHBoxLayout()
        title = QLabel("Resources")
        title.setStyleSheet("font-size:22px;font-weight:800;")
        self.refresh_btn = QPushButton("Refresh")
        title_row.addWidget(title)
        title_row.addStretch()
        title_row.addWidget(self.refresh_btn)
        layout.addLayout(title_row)

        self.info = QLabel("")
        self.info.setStyleSheet("color:#9a9a9a; margin-top:6px;")
        layout.addWidget(self.info)

        self.table = QTableWidget(0, 7)
        self.table.setHorizontalHeaderLabels(["ID", "Title", "Type", "Subject", "Age Group", "Date", "Status"])
        self.table.setColumnHidden(0, True)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.table.setSelectionBehavior(QTableWidget.SelectRows)
        self.table.horizontalHeader().setStretchLastSection(True)
        layout.addWidget(self.table)

        self.refresh_btn.clicked.connect(self.load_data)
        self.table.cellDoubleClicked.connect(lambda row, _col: self.open_row(row))
        signals.resources_changed.connect(self._on_resources_changed)

        self.load_data()

    # ---------------------------
    # Load
    # ---------------------------
    def load_data(self):
        self.info.setText("Loading...")
        self.runner.submit(
            lambda: list_resources(self.client),
            on_done=self._on_loaded,
            on_failed=self._on_load_failed,
        )

    def _on_resources_changed(self, _resource_id=None):
        self.load_data()

    def _on_loaded(self, resources: list[Resource]):
        self._resources = list(resources)
        self.table.setRowCount(0)
        for r, res in enumerate(self._resources):
            self.table.insertRow(r)
            self.table.setItem(r, 0, QTableWidgetItem(str(res.id)))
            self.table.setItem(r, 1, QTableWidgetItem(res.title))
            self.table.setItem(r, 2, QTableWidgetItem(res.type))
            self.table.setItem(r, 3, QTableWidgetItem(res.subject))
            self.table.setItem(r, 4, QTableWidgetItem(res.age_group))
            self.table.setItem(r, 5, QTableWidgetItem(res.event_date_label()))
            self.table.setItem(r, 6, QTableWidgetItem(res.status_label()))

        pending = sum(1 for r in self._resources if not r.is_approved)
        self.info.setText(f"{len(self._resources)} resources ({pending} pending). Double click a row to open.")

        # keep an open card in sync with the refetched data
        if self._modal is not None:
            current = self.find(self._modal.card.resource.id)
            if current is not None:
                self._modal.card.set_resource(current)

    def _on_load_failed(self, err: Exception):
        log.error("Failed to load resources: %s", err)
        self.info.setText("Could not load resources. Press Refresh to try again.")

    def find(self, resource_id) -> Resource | None:
        for r in self._resources:
            if str(r.id) == str(resource_id):
                return r
        return None

    @property
    def resources(self) -> list[Resource]:
        return list(self._resources)

    # ---------------------------
    # Modal
    # ---------------------------
    def open_row(self, row: int):
        if 0 <= row < len(self._resources):
            self.open_resource(self._resources[row])

    def build_modal(self, resource: Resource) -> ResourceModal:
        allowed = self.identity.is_signed_in() and is_owner(resource, self.identity.current_user_id)
        # edit/delete act on whatever the card shows now (it may have been refetched)
        dlg = ResourceModal(
            resource,
            self.identity,
            self.client,
            parent=self,
            can_edit=allowed,
            can_delete=allowed,
            on_edit=lambda: self.edit_resource(dlg.card.resource),
            on_delete=lambda: self.delete_resource(dlg.card.resource),
            on_approved=self._on_approved,
            notifier=self.notifier,
            runner=self.runner,
        )
        return dlg

    def open_resource(self, resource: Resource):
        dlg = self.build_modal(resource)
        self._modal = dlg
        try:
            dlg.exec()
        finally:
            self._modal = None
            dlg.card.dispose()
            dlg.deleteLater()

    def _on_approved(self, resource_id):
        signals.resources_changed.emit(resource_id)

    # ---------------------------
    # Edit / Delete (owner)
    # ---------------------------
    def edit_resource(self, resource: Resource):
        dlg = EditResourceDialog(resource, self)
        if dlg.exec() != QDialog.Accepted:
            return
        payload = dlg.data
        self.runner.submit(
            lambda: update_resource(self.client, resource.id, payload),
            on_done=lambda _res: self._on_saved(resource.id),
            on_failed=lambda err: self._on_action_failed("update", err),
        )

    def delete_resource(self, resource: Resource):
        self.runner.submit(
            lambda: delete_resource(self.client, resource.id),
            on_done=lambda _res: self._on_deleted(resource.id),
            on_failed=lambda err: self._on_action_failed("delete", err),
        )

    def _on_saved(self, resource_id):
        self.notifier.success("Resource updated")
        signals.resources_changed.emit(resource_id)

    def _on_deleted(self, resource_id):
        if self._modal is not None and str(self._modal.card.resource.id) == str(resource_id):
            self._modal.accept()
        self.notifier.success("Resource deleted")
        signals.resources_changed.emit(resource_id)

    def _on_action_failed(self, action: str, err: Exception):
        log.error("Could not %s resource: %s", action, err)
        QMessageBox.critical(self, "Error", f"Could not {action} resource:\n{err}")
