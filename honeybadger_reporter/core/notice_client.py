"""
HTTP client for Honeybadger notice delivery.

POSTs a serialized notice to the Honeybadger notices API exactly once.
A 201 response means the notice was accepted; any other status is returned
to the caller as a failed delivery along with the response text. Transport
errors are not caught here.
"""

from __future__ import annotations

import logging
from http import HTTPStatus

import httpx

from honeybadger_reporter.__metadata__ import NOTICES_URL


logger = logging.getLogger(__name__)


def _build_headers(api_key: str) -> dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "X-API-Key": api_key,
    }


def post_notice(
    report_json: str,
    api_key: str,
    *,
    endpoint: str = NOTICES_URL,
    client: httpx.Client | None = None,
) -> tuple[bool, str]:
    """
    POST a serialized notice to Honeybadger.

    Args:
        report_json: Notice document, already serialized to JSON
        api_key: Project API key, sent as X-API-Key
        endpoint: Notices URL
        client: Optional preconfigured client (timeouts, transport, proxies).
            When omitted a client with httpx defaults is opened for this call.

    Returns:
        Tuple of (accepted, response_text). ``accepted`` is True only for
        HTTP 201; ``response_text`` is "" when the server sent no body.

    Raises:
        httpx.HTTPError: On connection, TLS, timeout or read failures
    """
    logger.info("POSTing notice to %s (%d bytes)", endpoint, len(report_json))

    content = report_json.encode("utf-8")
    headers = _build_headers(api_key)

    if client is None:
        with httpx.Client() as owned_client:
            response = owned_client.post(endpoint, content=content, headers=headers)
    else:
        response = client.post(endpoint, content=content, headers=headers)

    response_text = response.text or ""

    if response.status_code != HTTPStatus.CREATED:
        logger.info("Honeybadger rejected notice (status=%d)", response.status_code)
        return False, response_text

    logger.info("Notice accepted (status=%d)", response.status_code)
    return True, response_text
