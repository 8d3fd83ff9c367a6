"""Tests for the Gorse engine client.

A fake session captures the outgoing requests, so these tests check the
URLs, headers and payloads sent to the engine and how its answers are read.
"""

from datetime import datetime, timezone

import pytest
import requests

from recgate.engine.client import GorseClient
from recgate.engine.models import Feedback, Item, ItemPatch, RowAffected, User, UserPatch
from recgate.exceptions import (
    EngineResponseError,
    EngineTimeoutError,
    EngineUnavailableError,
)
from fakes import FakeResponse, FakeSession


def _client(session: FakeSession) -> GorseClient:
    return GorseClient("http://engine.test:8088/", "secret", timeout=3.0, session=session)


def test_insert_user_posts_payload_with_api_key():
    session = FakeSession()

    result = _client(session).insert_user(User(user_id="u1", comment="c", labels=["a", "a"]))

    assert result == RowAffected(1)
    sent = session.requests[0]
    assert sent["method"] == "POST"
    assert sent["url"] == "http://engine.test:8088/api/user"
    assert sent["headers"] == {"X-API-Key": "secret"}
    assert sent["json"] == {"UserId": "u1", "Comment": "c", "Labels": ["a", "a"]}
    assert sent["timeout"] == 3.0


def test_update_user_patches_only_present_fields():
    session = FakeSession()

    _client(session).update_user("u1", UserPatch(comment=""))

    sent = session.requests[0]
    assert sent["method"] == "PATCH"
    assert sent["url"] == "http://engine.test:8088/api/user/u1"
    assert sent["json"] == {"Comment": ""}


def test_identifiers_are_percent_encoded_in_paths():
    session = FakeSession()

    _client(session).update_item("a/b c", ItemPatch(is_hidden=False))

    assert session.requests[0]["url"] == "http://engine.test:8088/api/item/a%2Fb%20c"
    assert session.requests[0]["json"] == {"IsHidden": False}


def test_insert_item_sends_timestamp():
    session = FakeSession()
    item = Item(item_id="i1", timestamp="2024-05-01T09:30:00+00:00", categories=["tech"])

    _client(session).insert_item(item)

    assert session.requests[0]["json"] == {
        "ItemId": "i1",
        "Comment": "",
        "Categories": ["tech"],
        "Labels": [],
        "Timestamp": "2024-05-01T09:30:00+00:00",
    }


def test_update_item_serializes_patch_timestamp():
    session = FakeSession()
    stamp = datetime(2024, 5, 1, 9, 30, 15, 250000, tzinfo=timezone.utc)

    _client(session).update_item("i1", ItemPatch(labels=[], timestamp=stamp))

    assert session.requests[0]["json"] == {
        "Labels": [],
        "Timestamp": "2024-05-01T09:30:15.250000+00:00",
    }


def test_insert_feedback_posts_a_list():
    session = FakeSession(FakeResponse(200, {"RowAffected": 1}))
    feedback = Feedback(feedback_type="like", user_id="u1", item_id="i1", timestamp="2024-05-01T09:30:00+00:00")

    result = _client(session).insert_feedback([feedback])

    assert result.row_affected == 1
    sent = session.requests[0]
    assert sent["url"] == "http://engine.test:8088/api/feedback"
    assert sent["json"] == [
        {
            "FeedbackType": "like",
            "UserId": "u1",
            "ItemId": "i1",
            "Timestamp": "2024-05-01T09:30:00+00:00",
        }
    ]


def test_get_recommend_without_category():
    session = FakeSession(FakeResponse(200, ["i3", "i1", "i2"]))

    result = _client(session).get_recommend("u1", "", 5)

    assert result == ["i3", "i1", "i2"]
    sent = session.requests[0]
    assert sent["method"] == "GET"
    assert sent["url"] == "http://engine.test:8088/api/recommend/u1"
    assert sent["params"] == {"n": 5}
    assert sent["json"] is None


def test_get_recommend_with_category():
    session = FakeSession(FakeResponse(200, ["i1"]))

    _client(session).get_recommend("u1", "tech news", 1)

    assert session.requests[0]["url"] == "http://engine.test:8088/api/recommend/u1/tech%20news"


def test_get_recommend_null_body_is_empty():
    session = FakeSession(FakeResponse(200, None))

    assert _client(session).get_recommend("u1", "", 5) == []


def test_get_recommend_rejects_non_list_body():
    session = FakeSession(FakeResponse(200, {"items": []}))

    with pytest.raises(EngineResponseError):
        _client(session).get_recommend("u1", "", 5)


def test_error_status_raises_response_error():
    session = FakeSession(FakeResponse(401, None, text="unauthorized"))

    with pytest.raises(EngineResponseError) as exc_info:
        _client(session).insert_user(User(user_id="u1"))

    assert exc_info.value.status_code == 502
    assert exc_info.value.details == {
        "operation": "insert_user",
        "upstream_status": 401,
        "upstream_body": "unauthorized",
    }


def test_non_json_body_raises_response_error():
    session = FakeSession(FakeResponse(200, None, text="<html>"))

    with pytest.raises(EngineResponseError):
        _client(session).insert_user(User(user_id="u1"))


def test_connection_failure_raises_unavailable():
    session = FakeSession(error=requests.ConnectionError("connection refused"))

    with pytest.raises(EngineUnavailableError) as exc_info:
        _client(session).insert_feedback([])

    assert exc_info.value.operation == "insert_feedback"
    assert exc_info.value.endpoint == "http://engine.test:8088"
    assert exc_info.value.details == {"operation": "insert_feedback", "error_type": "ConnectionError"}
    assert "engine.test" not in exc_info.value.message


def test_timeout_raises_timeout_error():
    session = FakeSession(error=requests.ReadTimeout("read timed out"))

    with pytest.raises(EngineTimeoutError) as exc_info:
        _client(session).get_recommend("u1", "", 5)

    assert exc_info.value.status_code == 504
    assert exc_info.value.details["timeout_seconds"] == 3.0


def test_close_closes_session():
    session = FakeSession()

    _client(session).close()

    assert session.closed
