"""
Caller-side handling of failed notice delivery.

HoneybadgerService.report_exception raises when the notice cannot be sent
and returns False when Honeybadger refuses it. Code that must never fail
while handling an error (middleware, shutdown hooks) goes through
report_exception_or_log instead, which turns both outcomes into log records.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import TYPE_CHECKING, Any

import httpx


if TYPE_CHECKING:
    from honeybadger_reporter.service import HoneybadgerService

logger = logging.getLogger(__name__)


def report_exception_or_log(
    service: HoneybadgerService,
    exc: BaseException,
    environ: MutableMapping[str, Any] | None = None,
) -> bool:
    """
    Report an exception, logging instead of raising if delivery fails.

    Args:
        service: Configured reporting service
        exc: The exception to report
        environ: WSGI environ of the failing request, if any

    Returns:
        True if Honeybadger accepted the notice
    """
    try:
        accepted, response_text = service.report_exception(exc, environ)
    except httpx.HTTPError:
        logger.exception(
            "Could not deliver notice for %s to Honeybadger",
            type(exc).__name__,
        )
        return False

    if not accepted:
        logger.warning(
            "Honeybadger did not accept notice for %s: %s",
            type(exc).__name__,
            response_text,
        )
    return accepted
