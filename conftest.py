"""
Test configuration to ensure the reporter package resolves in local pytest
runs, plus fixtures shared by every test directory.
"""

from __future__ import annotations

import io
import sys
from pathlib import Path
from wsgiref.util import setup_testing_defaults

import httpx
import pytest


ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from honeybadger_reporter.core.config import HoneybadgerConfig  # noqa: E402


@pytest.fixture
def make_environ():
    """Factory for WSGI environs with an optional body."""

    def _make(body: bytes = b"", content_type: str | None = None, **extra) -> dict:
        environ: dict = {
            "wsgi.input": io.BytesIO(body),
            "CONTENT_LENGTH": str(len(body)) if body else "",
        }
        if content_type is not None:
            environ["CONTENT_TYPE"] = content_type
        environ.update(extra)
        setup_testing_defaults(environ)
        return environ

    return _make


@pytest.fixture
def config(tmp_path) -> HoneybadgerConfig:
    """Reporter configuration pointing at a temporary project root."""
    return HoneybadgerConfig(
        api_key="test-api-key",
        environment_name="test",
        project_root=tmp_path,
        hostname="worker-1",
    )


@pytest.fixture
def mock_client():
    """Factory for httpx clients that answer every request with ``handler``."""
    clients: list[httpx.Client] = []

    def _make(handler) -> httpx.Client:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()
