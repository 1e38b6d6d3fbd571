import logging

from src.api.client import ApiError
from src.ui.approval import ApprovalGate

APPROVE = ("PATCH", "/resources/r1/approve")


def test_success_notifies_once_and_calls_back(make_client, notifier, runner):
    client = make_client({APPROVE: {"ok": True}})
    approved = []
    ApprovalGate(client, notifier, runner=runner).approve("r1", on_approved=approved.append)

    assert client.calls == [("PATCH", "/resources/r1/approve", {"approve": True})]
    assert [n.status for n in notifier.history] == ["success"]
    assert notifier.history[0].title == "Resource approved"
    assert notifier.history[0].duration_ms == 3000
    assert approved == ["r1"]

def test_failure_notifies_once_and_is_swallowed(make_client, notifier, runner, caplog):
    client = make_client({APPROVE: ApiError("forbidden", 403)})
    approved = []
    with caplog.at_level(logging.ERROR):
        ApprovalGate(client, notifier, runner=runner).approve("r1", on_approved=approved.append)

    assert [n.status for n in notifier.history] == ["error"]
    assert notifier.history[0].description == "Failed to approve resource"
    assert notifier.history[0].duration_ms == 5000
    assert approved == []
    assert "Failed to approve resource r1" in caplog.text

def test_failure_is_not_retried(make_client, notifier, runner):
    client = make_client({APPROVE: ApiError("down")})
    ApprovalGate(client, notifier, runner=runner).approve("r1")
    assert client.count(*APPROVE) == 1

def test_each_call_sends_its_own_request(make_client, notifier, runner):
    client = make_client({APPROVE: {"ok": True}})
    gate = ApprovalGate(client, notifier, runner=runner)
    gate.approve("r1")
    gate.approve("r1")
    assert client.count(*APPROVE) == 2
    assert [n.status for n in notifier.history] == ["success", "success"]

def test_callback_is_optional(make_client, notifier, runner):
    client = make_client({APPROVE: None})
    ApprovalGate(client, notifier, runner=runner).approve("r1")
    assert [n.status for n in notifier.history] == ["success"]

def test_closed_owner_gets_no_notification_but_embedder_is_told(make_client, notifier, deferred):
    from src.ui.tasks import LivenessToken

    client = make_client({APPROVE: {"ok": True}})
    token = LivenessToken()
    approved = []
    ApprovalGate(client, notifier, runner=deferred).approve("r1", on_approved=approved.append, token=token)

    token.cancel()
    deferred.finish()
    assert notifier.history == []
    assert approved == ["r1"]

def test_closed_owner_failure_is_silent(make_client, notifier, deferred):
    from src.ui.tasks import LivenessToken

    client = make_client({APPROVE: ApiError("down")})
    token = LivenessToken()
    ApprovalGate(client, notifier, runner=deferred).approve("r1", token=token)

    token.cancel()
    deferred.finish()
    assert notifier.history == []
