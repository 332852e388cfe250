"""Tests for notice serialization rules."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from honeybadger_reporter.core.notice import (
    ErrorInfo,
    ErrorReport,
    ProjectRoot,
    RequestInfo,
    ServerInfo,
    StackFrame,
    UserContext,
)


def _report(request: RequestInfo | None) -> ErrorReport:
    return ErrorReport(
        error=ErrorInfo(
            error_class="ValueError",
            message="bad value",
            backtrace=[StackFrame(number=12, file="app.py", method="handler")],
        ),
        request=request,
        server=ServerInfo(
            project_root=ProjectRoot(path="/srv/app"),
            environment_name="staging",
            hostname="web-1",
        ),
    )


def test_top_level_keys_and_class_alias():
    """Notices should have four top-level keys and a literal "class" key."""
    payload = json.loads(_report(None).to_json())

    assert set(payload) == {"notifier", "error", "request", "server"}
    assert payload["error"]["class"] == "ValueError"
    assert "error_class" not in payload["error"]
    assert payload["error"]["backtrace"] == [
        {"number": 12, "file": "app.py", "method": "handler"}
    ]
    assert payload["notifier"]["name"] == "Honeybadger Python Notifier"
    assert payload["server"] == {
        "project_root": {"path": "/srv/app"},
        "environment_name": "staging",
        "hostname": "web-1",
    }


def test_absent_context_and_params_are_omitted_but_null_cgi_values_kept():
    """Absent context/params should be dropped while null CGI values stay."""
    request = RequestInfo(
        url="http://web-1/",
        cgi_data={"REMOTE_ADDR": None, "HTTP_HOST": "web-1"},
    )

    payload = _report(request).to_payload()

    assert "context" not in payload["request"]
    assert "params" not in payload["request"]
    assert payload["request"]["cgi_data"] == {"REMOTE_ADDR": None, "HTTP_HOST": "web-1"}
    assert payload["request"]["form"] == {}


def test_present_context_and_params_are_emitted():
    """Present context and params should be serialized."""
    request = RequestInfo(
        url="http://web-1/",
        cgi_data={},
        context=UserContext(username="ada", user_id=42),
        params={"request_body": "raw"},
    )

    payload = _report(request).to_payload()

    assert payload["request"]["context"] == {"username": "ada", "user_id": 42}
    assert payload["request"]["params"] == {"request_body": "raw"}


def test_reports_are_immutable():
    """Assembled reports should reject attribute assignment."""
    report = _report(None)

    with pytest.raises(ValidationError):
        report.request = None
