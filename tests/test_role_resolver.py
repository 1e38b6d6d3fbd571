import logging

from src.api.client import ApiError
from src.ui.role_resolver import RoleResolver
from src.ui.tasks import LivenessToken

CURRENT = ("GET", "/users/current")


def _resolver(client, identity, runner, token=None):
    r = RoleResolver(client, identity, runner=runner, token=token)
    r.seen = []
    r.role_changed.connect(r.seen.append)
    return r


def test_signed_out_makes_no_request(make_client, identity, runner):
    client = make_client({CURRENT: {"role": "superAdmin"}})
    r = _resolver(client, identity, runner)
    r.start()
    assert r.role is None
    assert client.count(*CURRENT) == 0

def test_signed_in_stores_role(make_client, signed_in, runner):
    client = make_client({CURRENT: {"id": "user_1", "role": "superAdmin", "email": "a@b.c"}})
    r = _resolver(client, signed_in, runner)
    r.start()
    assert r.role == "superAdmin"
    assert r.seen == ["superAdmin"]
    assert client.count(*CURRENT) == 1

def test_failure_logs_and_leaves_role_unset(make_client, signed_in, runner, caplog):
    client = make_client({CURRENT: ApiError("boom", 500)})
    r = _resolver(client, signed_in, runner)
    with caplog.at_level(logging.ERROR):
        r.start()
    assert r.role is None
    assert "Failed to get current user info" in caplog.text
    assert client.count(*CURRENT) == 1

def test_failed_retry_does_not_keep_previous_role(make_client, signed_in, runner):
    client = make_client({CURRENT: {"role": "superAdmin"}})
    r = _resolver(client, signed_in, runner)
    r.start()
    assert r.role == "superAdmin"

    client.routes[CURRENT] = ApiError("down")
    r.resolve(True)
    assert r.role is None

def test_sign_in_transition_triggers_resolution(make_client, identity, runner):
    client = make_client({CURRENT: {"role": "teacher"}})
    r = _resolver(client, identity, runner)
    r.start()
    assert client.count(*CURRENT) == 0

    identity.sign_in("tok", "user_1")
    assert r.role == "teacher"
    assert client.count(*CURRENT) == 1

def test_sign_out_clears_role(make_client, signed_in, runner):
    client = make_client({CURRENT: {"role": "superAdmin"}})
    r = _resolver(client, signed_in, runner)
    r.start()
    signed_in.sign_out()
    assert r.role is None
    assert r.seen == ["superAdmin", None]

def test_stale_response_after_sign_out_is_dropped(make_client, signed_in, deferred):
    client = make_client({CURRENT: {"role": "superAdmin"}})
    r = _resolver(client, signed_in, deferred)
    r.start()
    signed_in.sign_out()      # newer generation, nothing submitted
    deferred.finish()         # old response lands late
    assert r.role is None

def test_only_latest_of_overlapping_fetches_wins(make_client, signed_in, deferred):
    client = make_client({CURRENT: {"role": "teacher"}})
    r = _resolver(client, signed_in, deferred)
    r.start()
    r.resolve(True)
    assert len(deferred.jobs) == 2

    deferred.finish(1)        # latest completes first
    client.routes[CURRENT] = {"role": "superAdmin"}
    deferred.finish(0)        # older one completes last
    assert r.role == "teacher"

def test_cancelled_token_blocks_late_write(make_client, signed_in, deferred):
    client = make_client({CURRENT: {"role": "superAdmin"}})
    token = LivenessToken()
    r = _resolver(client, signed_in, deferred, token=token)
    r.start()
    token.cancel()
    deferred.finish()
    assert r.role is None
    assert r.seen == []

def test_cancelled_token_stops_new_requests(make_client, identity, runner):
    client = make_client({CURRENT: {"role": "superAdmin"}})
    token = LivenessToken()
    r = _resolver(client, identity, runner, token=token)
    token.cancel()
    identity.sign_in("tok", "user_1")
    assert client.count(*CURRENT) == 0
    assert r.role is None
