# src/ui/tasks.py
from __future__ import annotations

from typing import Any, Callable

from PySide6.QtCore import QObject, QThread, Signal, Slot


class LivenessToken:
    """Checked before any late state write; cancelled when the owner goes away."""

    def __init__(self):
        self._alive = True

    @property
    def alive(self) -> bool:
        return self._alive

    def cancel(self):
        self._alive = False


# ---------------------------
# Worker (runs in QThread)
# ---------------------------
class _Worker(QObject):
    done = Signal(object)
    failed = Signal(object)   # the exception

    def __init__(self, fn: Callable[[], Any]):
        super().__init__()
        self.fn = fn

    def run(self):
        try:
            result = self.fn()
        except Exception as e:
            self.failed.emit(e)
            return
        self.done.emit(result)


class _Relay(QObject):
    # lives in the GUI thread, so queued signals land here
    def __init__(self, on_done, on_failed, on_settled, parent=None):
        super().__init__(parent)
        self._on_done = on_done
        self._on_failed = on_failed
        self._on_settled = on_settled

    @Slot(object)
    def deliver_done(self, result):
        try:
            self._on_done(result)
        finally:
            self._on_settled()

    @Slot(object)
    def deliver_failed(self, err):
        try:
            self._on_failed(err)
        finally:
            self._on_settled()


class TaskRunner(QObject):
    """
    Runs a blocking call (HTTP) off the GUI thread.
    on_done(result) / on_failed(exc) are called back on the GUI thread.
    """
    def __init__(self, parent=None):
        super().__init__(parent)
        self._jobs: set = set()   # relays still waiting to deliver
        self._live: dict = {}     # relay -> (thread, worker), kept until the relay is gone

    def submit(self, fn: Callable[[], Any], on_done: Callable[[Any], None], on_failed: Callable[[Exception], None]):
        thread = QThread(self)
        worker = _Worker(fn)
        worker.moveToThread(thread)
        relay = _Relay(on_done, on_failed, lambda: self._jobs.discard(relay), self)

        thread.started.connect(worker.run)
        worker.done.connect(relay.deliver_done)
        worker.failed.connect(relay.deliver_failed)

        worker.done.connect(thread.quit)
        worker.failed.connect(thread.quit)

        self._jobs.add(relay)
        self._live[relay] = (thread, worker)

        # finished is emitted from the worker thread; deleteLater hops back to each owner's thread
        thread.finished.connect(worker.deleteLater)
        thread.finished.connect(relay.deleteLater)
        thread.finished.connect(thread.deleteLater)
        relay.destroyed.connect(lambda *_: self._live.pop(relay, None))

        thread.start()

    def pending(self) -> int:
        return len(self._jobs)
