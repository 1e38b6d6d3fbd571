# src/ui/role_resolver.py
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from src.api.client import ApiClient
from src.api.resources_api import get_current_user
from src.ui.auth.identity import Identity
from src.ui.tasks import LivenessToken, TaskRunner

log = logging.getLogger(__name__)


class RoleResolver(QObject):
    """
    Fetches the signed-in user's role for one card.

    - signed out -> role stays None, no request
    - every attempt clears the previous role first
    - responses from an older attempt (generation) are dropped
    - nothing is written once the liveness token is cancelled
    - failures are logged only; role stays None (no retry)
    """
    role_changed = Signal(object)  # str | None

    def __init__(
        self,
        client: ApiClient,
        identity: Identity,
        runner: TaskRunner | None = None,
        token: LivenessToken | None = None,
        parent=None,
    ):
        super().__init__(parent)
        self._client = client
        self._identity = identity
        self._runner = runner or TaskRunner(self)
        self._token = token or LivenessToken()
        self._role: Optional[str] = None
        self._generation = 0

        identity.signed_in_changed.connect(self.resolve)

    @property
    def role(self) -> Optional[str]:
        return self._role

    @property
    def generation(self) -> int:
        return self._generation

    def start(self):
        """Mount: resolve for the current sign-in state."""
        self.resolve(self._identity.is_signed_in())

    def resolve(self, is_signed_in: bool):
        if not self._token.alive:
            return

        self._generation += 1
        gen = self._generation
        self._set_role(None)

        if not is_signed_in:
            return

        self._runner.submit(
            lambda: get_current_user(self._client),
            on_done=lambda user: self._on_resolved(gen, user),
            on_failed=lambda err: self._on_failed(gen, err),
        )

    def _on_resolved(self, gen: int, user: dict):
        if not self._is_current(gen):
            log.debug("Dropping stale role response (generation %s)", gen)
            return
        role = user.get("role")
        self._set_role(str(role) if role else None)

    def _on_failed(self, gen: int, err: Exception):
        log.error("Failed to get current user info: %s", err)
        if self._is_current(gen):
            self._set_role(None)

    def _is_current(self, gen: int) -> bool:
        return self._token.alive and gen == self._generation

    def _set_role(self, role: Optional[str]):
        if role == self._role:
            return
        self._role = role
        self.role_changed.emit(role)
