# src/ui/approval.py
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from PySide6.QtCore import QObject

from src import config
from src.api.client import ApiClient
from src.api.resources_api import approve_resource
from src.core.models import Resource
from src.core.permissions import can_approve
from src.ui.tasks import LivenessToken, TaskRunner
from src.ui.widgets.toast import Notifier

log = logging.getLogger(__name__)


class ApprovalGate(QObject):
    """
    superAdmin-only, one-way pending -> approved.

    approve() sends one PATCH per call (no debounce, no retry) and reports
    through the notifier. Errors end here; nothing is re-raised.
    The local resource is not touched: `on_approved` tells the embedder to refetch.
    A dead token (owner closed) skips the notification; `on_approved` still runs.
    """
    def __init__(self, client: ApiClient, notifier: Notifier, runner: TaskRunner | None = None, parent=None):
        super().__init__(parent)
        self._client = client
        self._notifier = notifier
        self._runner = runner or TaskRunner(self)

    @staticmethod
    def is_visible(role: Optional[str], resource: Resource) -> bool:
        return can_approve(role, resource)

    def approve(
        self,
        resource_id: Any,
        on_approved: Callable[[Any], None] | None = None,
        token: LivenessToken | None = None,
    ):
        log.info("Approving resource %s", resource_id)
        token = token or LivenessToken()
        self._runner.submit(
            lambda: approve_resource(self._client, resource_id),
            on_done=lambda _ack: self._on_done(resource_id, on_approved, token),
            on_failed=lambda err: self._on_failed(resource_id, err, token),
        )

    def _on_done(self, resource_id, on_approved, token):
        if token.alive:
            self._notifier.success("Resource approved", duration_ms=config.SUCCESS_TOAST_MS)
        if on_approved is not None:
            on_approved(resource_id)

    def _on_failed(self, resource_id, err: Exception, token):
        log.error("Failed to approve resource %s: %s", resource_id, err)
        if token.alive:
            self._notifier.error("Error", "Failed to approve resource", duration_ms=config.ERROR_TOAST_MS)
