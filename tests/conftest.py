import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication

from src.api.client import ApiClient
from src.ui.auth.identity import Identity
from src.ui.widgets.toast import Notifier


class InlineRunner:
    """Runs jobs immediately on the calling thread."""

    def __init__(self):
        self.submitted = 0

    def submit(self, fn, on_done, on_failed):
        self.submitted += 1
        try:
            result = fn()
        except Exception as e:
            on_failed(e)
            return
        on_done(result)


class DeferredRunner:
    """Holds jobs until the test decides to finish them (in any order)."""

    def __init__(self):
        self.jobs = []

    def submit(self, fn, on_done, on_failed):
        self.jobs.append((fn, on_done, on_failed))

    def finish(self, index=0):
        fn, on_done, on_failed = self.jobs.pop(index)
        try:
            result = fn()
        except Exception as e:
            on_failed(e)
            return
        on_done(result)


class FakeClient(ApiClient):
    """Answers from a (method, path) -> value|Exception table and records calls."""

    def __init__(self, routes=None):
        super().__init__(base_url="http://api.test")
        self.routes = dict(routes or {})
        self.calls = []

    def request(self, method, path, json=None):
        self.calls.append((method, path, json))
        result = self.routes.get((method, path))
        if isinstance(result, Exception):
            raise result
        return result

    def count(self, method, path):
        return sum(1 for m, p, _ in self.calls if m == method and p == path)


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def make_client():
    return FakeClient


@pytest.fixture
def runner():
    return InlineRunner()


@pytest.fixture
def deferred():
    return DeferredRunner()


@pytest.fixture
def identity():
    return Identity()


@pytest.fixture
def signed_in(identity):
    identity.sign_in("tok-123", "user_1")
    return identity


@pytest.fixture
def notifier():
    n = Notifier()
    n.history = []
    n.posted.connect(n.history.append)
    return n
