# src/ui/auth/identity.py

from __future__ import annotations
from typing import Any, Optional

from PySide6.QtCore import QObject, Signal


class Identity(QObject):
    """
    Who is signed in (passed around, never global).
    `signed_in_changed` fires only on a real transition.
    """
    signed_in_changed = Signal(bool)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._token: Optional[str] = None
        self._user_id: Any = None

    def is_signed_in(self) -> bool:
        return bool(self._token)

    @property
    def current_user_id(self) -> Any:
        return self._user_id

    @property
    def token(self) -> Optional[str]:
        return self._token

    def sign_in(self, token: str, user_id: Any = None):
        was = self.is_signed_in()
        self._token = (token or "").strip() or None
        self._user_id = user_id if self._token else None
        if self.is_signed_in() != was:
            self.signed_in_changed.emit(self.is_signed_in())

    def sign_out(self):
        was = self.is_signed_in()
        self._token = None
        self._user_id = None
        if was:
            self.signed_in_changed.emit(False)
