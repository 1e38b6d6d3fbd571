# src/ui/widgets/toast.py
from __future__ import annotations

import logging
from dataclasses import dataclass

from PySide6.QtWidgets import QFrame, QVBoxLayout, QLabel, QWidget
from PySide6.QtCore import Qt, QObject, QTimer, Signal

from src import config

log = logging.getLogger(__name__)

_STATUS_COLORS = {
    "success": "#38a169",
    "error": "#e53e3e",
    "warning": "#dd6b20",
    "info": "#3182ce",
}


@dataclass(frozen=True)
class Notification:
    title: str
    status: str = "info"          # success | error | warning | info
    description: str = ""
    duration_ms: int = config.SUCCESS_TOAST_MS


class Toast(QFrame):
    """Small banner over the host window; closes itself after `duration_ms`."""

    def __init__(self, note: Notification, parent: QWidget):
        super().__init__(parent)
        self.setAttribute(Qt.WA_DeleteOnClose)
        self.setObjectName("toast")
        color = _STATUS_COLORS.get(note.status, _STATUS_COLORS["info"])
        self.setStyleSheet(
            f"#toast {{ background:{color}; border-radius:6px; }}"
            "QLabel { color:white; }"
        )

        lay = QVBoxLayout(self)
        lay.setContentsMargins(14, 10, 14, 10)

        title = QLabel(note.title)
        title.setStyleSheet("font-weight:700;")
        lay.addWidget(title)

        if note.description:
            desc = QLabel(note.description)
            desc.setWordWrap(True)
            lay.addWidget(desc)

        self.adjustSize()
        self._place()

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self.close)
        self._timer.start(max(0, int(note.duration_ms)))

    def _place(self):
        host = self.parentWidget()
        if host is None:
            return
        x = max(0, (host.width() - self.width()) // 2)
        y = max(0, host.height() - self.height() - 24)
        self.move(x, y)

    def mousePressEvent(self, event):
        # click to dismiss
        self.close()
        super().mousePressEvent(event)


class Notifier(QObject):
    """
    Transient notification channel.
    Every call emits `posted`; a Toast is shown only if a host widget is attached.
    """
    posted = Signal(object)  # Notification

    def __init__(self, host: QWidget | None = None, parent=None):
        super().__init__(parent)
        self._host = host

    def attach(self, host: QWidget | None):
        self._host = host

    def notify(self, title: str, status: str = "info", description: str = "", duration_ms: int | None = None):
        if duration_ms is None:
            duration_ms = config.ERROR_TOAST_MS if status == "error" else config.SUCCESS_TOAST_MS
        note = Notification(title=title, status=status, description=description, duration_ms=duration_ms)

        if self._host is not None:
            toast = Toast(note, self._host)
            toast.show()
            toast.raise_()

        self.posted.emit(note)
        return note

    def success(self, title: str, description: str = "", duration_ms: int = config.SUCCESS_TOAST_MS):
        return self.notify(title, "success", description, duration_ms)

    def error(self, title: str, description: str = "", duration_ms: int = config.ERROR_TOAST_MS):
        return self.notify(title, "error", description, duration_ms)
