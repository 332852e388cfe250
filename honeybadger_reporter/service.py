"""
Honeybadger reporting service.

This is the entry point applications call when a request fails:

1. Resolves the innermost exception of the chain
2. Assembles the notice (error, request, server, notifier)
3. Serializes it and POSTs it to Honeybadger
4. Returns (accepted, response_text)

Each call is independent. The service holds only its configuration, an
optional user lookup, and an optional httpx client.
"""

from __future__ import annotations

import logging
import socket
from collections.abc import MutableMapping
from typing import Any

import httpx

from honeybadger_reporter.core.backtrace import extract_backtrace
from honeybadger_reporter.core.config import HoneybadgerConfig
from honeybadger_reporter.core.exceptions import resolve_root_cause
from honeybadger_reporter.core.notice import (
    ErrorInfo,
    ErrorReport,
    Notifier,
    ProjectRoot,
    ServerInfo,
)
from honeybadger_reporter.core.notice_client import post_notice
from honeybadger_reporter.core.request_context import UserLookup, build_request_info


logger = logging.getLogger(__name__)


def _exception_message(exc: BaseException) -> str:
    try:
        return str(exc)
    except Exception:
        return f"<unprintable {type(exc).__name__}>"


class HoneybadgerService:
    """Builds notices for failed requests and delivers them to Honeybadger."""

    def __init__(
        self,
        config: HoneybadgerConfig,
        *,
        user_lookup: UserLookup | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.config = config
        self.user_lookup = user_lookup
        self.client = client

    def report_exception(
        self,
        exception: BaseException,
        environ: MutableMapping[str, Any] | None = None,
    ) -> tuple[bool, str]:
        """
        Report ``exception`` to Honeybadger.

        Args:
            exception: The caught exception; may wrap a chain of causes
            environ: WSGI environ of the failing request, if there is one

        Returns:
            Tuple of (accepted, response_text)

        Raises:
            httpx.HTTPError: If the notice could not be delivered at all
        """
        report = self.build_report(exception, environ)

        logger.info(
            "Reporting %s to Honeybadger (environment=%s)",
            report.error.error_class,
            report.server.environment_name,
        )

        return post_notice(
            report.to_json(),
            self.config.api_key,
            endpoint=self.config.endpoint,
            client=self.client,
        )

    def build_report(
        self,
        exception: BaseException,
        environ: MutableMapping[str, Any] | None = None,
    ) -> ErrorReport:
        """Assemble the notice for ``exception`` without sending it."""
        root = resolve_root_cause(exception)

        return ErrorReport(
            notifier=Notifier.default(),
            error=ErrorInfo(
                error_class=type(root).__name__,
                message=_exception_message(root),
                backtrace=extract_backtrace(root),
            ),
            request=build_request_info(environ, self.user_lookup),
            server=ServerInfo(
                project_root=ProjectRoot(path=self.config.resolved_project_root()),
                environment_name=self.config.environment_name,
                hostname=self._hostname(environ),
            ),
        )

    def _hostname(self, environ: MutableMapping[str, Any] | None) -> str:
        if isinstance(environ, MutableMapping):
            server_name = environ.get("SERVER_NAME")
            if server_name:
                return str(server_name)
        return self.config.hostname or socket.gethostname()
