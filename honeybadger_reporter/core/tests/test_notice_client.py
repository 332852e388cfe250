"""Tests for notice delivery."""

from __future__ import annotations

import httpx
import pytest

from honeybadger_reporter.__metadata__ import NOTICES_URL
from honeybadger_reporter.core import notice_client
from honeybadger_reporter.core.notice_client import post_notice


def test_created_response_is_success(mock_client):
    """A 201 response should be a success with the body and required headers sent."""
    seen: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, text='{"id":"abc"}')

    result = post_notice('{"error": {}}', "secret-key", client=mock_client(_handler))

    assert result == (True, '{"id":"abc"}')
    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == NOTICES_URL
    assert request.headers["Content-Type"] == "application/json"
    assert request.headers["Accept"] == "application/json"
    assert request.headers["X-API-Key"] == "secret-key"
    assert request.content == b'{"error": {}}'


def test_other_status_is_failure_with_body(mock_client):
    """Non-201 responses should fail but still return the body."""
    client = mock_client(lambda _request: httpx.Response(422, text='{"error":"invalid"}'))

    assert post_notice("{}", "secret-key", client=client) == (False, '{"error":"invalid"}')


def test_ok_is_not_created(mock_client):
    """A 200 response is not a 201 and should count as failure."""
    client = mock_client(lambda _request: httpx.Response(200, text="ok"))

    assert post_notice("{}", "secret-key", client=client) == (False, "ok")


def test_empty_response_body_is_empty_string(mock_client):
    """An empty response body should come back as ""."""
    client = mock_client(lambda _request: httpx.Response(201))

    assert post_notice("{}", "secret-key", client=client) == (True, "")


def test_connection_failure_propagates_without_retry(mock_client):
    """Connection errors should propagate after a single attempt."""
    calls = {"count": 0}

    def _handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(httpx.ConnectError):
        post_notice("{}", "secret-key", client=mock_client(_handler))

    assert calls["count"] == 1


def test_opens_its_own_client_when_none_given(monkeypatch):
    """Without an injected client a fresh httpx.Client is used and closed."""
    state = {"closed": False}

    class _Client:
        def __init__(self, *args, **kwargs):
            pass

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc_val, exc_tb):
            state["closed"] = True
            return False

        def post(self, url, content=None, headers=None):
            state["url"] = url
            return httpx.Response(201, text="{}")

    monkeypatch.setattr(notice_client.httpx, "Client", _Client)

    assert post_notice("{}", "secret-key", endpoint="https://hb.test/v1/notices") == (True, "{}")
    assert state["url"] == "https://hb.test/v1/notices"
    assert state["closed"] is True
