"""
Request context harvesting for Honeybadger notices.

Reads the ``request`` block of a notice out of a WSGI environ:

- url: the reconstructed request URL
- form: urlencoded form fields
- cgi_data: a fixed allow-list of CGI/server variables
- params: the decoded request body, when there is one
- context: the authenticated user, when a lookup is configured

Every harvester contains its own failures. A malformed request degrades the
notice; it never stops the report from being sent.
"""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Callable, Mapping, MutableMapping
from typing import Any
from urllib.parse import parse_qs
from wsgiref.util import request_uri

from pydantic import ValidationError

from honeybadger_reporter.core.notice import RequestInfo, UserContext


logger = logging.getLogger(__name__)

UserLookup = Callable[[Mapping[str, Any]], Any]

# Variables mirrored into every notice, in this order, whether or not the
# request carries them.
CGI_KEYS: tuple[str, ...] = (
    "AUTH_USER",
    "CONTENT_LENGTH",
    "CONTENT_TYPE",
    "GATEWAY_INTERFACE",
    "HTTPS",
    "LOCAL_ADDR",
    "PATH_INFO",
    "QUERY_STRING",
    "REMOTE_ADDR",
    "REMOTE_HOST",
    "REMOTE_PORT",
    "REQUEST_METHOD",
    "SERVER_PROTOCOL",
    "SERVER_SOFTWARE",
    "HTTP_CACHE_CONTROL",
    "HTTP_CONNECTION",
    "HTTP_CONTENT_LENGTH",
    "HTTP_CONTENT_TYPE",
    "HTTP_ACCEPT",
    "HTTP_ACCEPT_ENCODING",
    "HTTP_ACCEPT_LANGUAGE",
    "HTTP_HOST",
    "HTTP_USER_AGENT",
    "HTTP_ORIGIN",
)

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Cache key for the buffered body inside the environ
BODY_ENVIRON_KEY = "honeybadger.request_body"


# =============================================================================
# CGI data
# =============================================================================


def collect_cgi_data(environ: Mapping[str, Any]) -> dict[str, str | None]:
    """
    Mirror the CGI allow-list out of ``environ``.

    The result always holds every key in CGI_KEYS; variables the request
    does not carry map to None.
    """
    cgi_data: dict[str, str | None] = {}
    for key in CGI_KEYS:
        value = environ.get(key)
        cgi_data[key] = None if value is None else str(value)
    return cgi_data


# =============================================================================
# Body
# =============================================================================


def _content_type(environ: Mapping[str, Any]) -> str:
    return str(environ.get("CONTENT_TYPE") or "").strip().lower()


def _media_type(environ: Mapping[str, Any]) -> str:
    content_type = environ.get("CONTENT_TYPE") or ""
    return str(content_type).split(";", 1)[0].strip().lower()


def _content_length(environ: Mapping[str, Any]) -> int | None:
    raw = environ.get("CONTENT_LENGTH")
    if raw in (None, ""):
        return None
    try:
        return max(int(raw), 0)
    except (TypeError, ValueError):
        return None


def buffer_request_body(environ: MutableMapping[str, Any]) -> bytes:
    """
    Read the request body once and make it readable again.

    ``wsgi.input`` is a single-use stream. The body is read up to
    CONTENT_LENGTH, cached in the environ, and ``wsgi.input`` is replaced by
    a rewound in-memory copy so handlers further down the stack see the
    same bytes. Calling this again returns the cached body and rewinds the
    copy.

    Args:
        environ: WSGI environ of the current request

    Returns:
        The raw body, ``b""`` when there is none
    """
    cached = environ.get(BODY_ENVIRON_KEY)
    if isinstance(cached, bytes):
        environ["wsgi.input"] = io.BytesIO(cached)
        return cached

    stream = environ.get("wsgi.input")
    if stream is None:
        body = b""
    else:
        length = _content_length(environ)
        if length is not None:
            body = stream.read(length) if length else b""
        elif environ.get("wsgi.input_terminated"):
            body = stream.read()
        else:
            body = b""

    environ[BODY_ENVIRON_KEY] = body
    environ["wsgi.input"] = io.BytesIO(body)
    return body


def _decode_body(body: bytes) -> str:
    return body.decode("utf-8", errors="replace")


def collect_params(environ: MutableMapping[str, Any]) -> dict[str, Any] | None:
    """
    Decode the request body into the notice's ``params`` block.

    Returns:
        None for an empty body. The parsed object for a JSON request whose
        body is a JSON object. ``{"request_body": text}`` otherwise,
        including when JSON parsing fails. None if the body cannot be read.
    """
    try:
        body = buffer_request_body(environ)
        if not body:
            return None

        text = _decode_body(body)
        if _content_type(environ) == JSON_CONTENT_TYPE:
            try:
                parsed = json.loads(text)
            except (ValueError, RecursionError):
                logger.debug("Request body declared as JSON did not parse")
            else:
                if isinstance(parsed, dict):
                    return parsed

        # Raw body
        return {"request_body": text}
    except Exception:
        logger.debug("Could not harvest request body", exc_info=True)
        return None


# =============================================================================
# Form and URL
# =============================================================================


def collect_form(environ: MutableMapping[str, Any]) -> dict[str, str | list[str]]:
    """
    Return urlencoded form fields from the request body.

    Single-valued fields collapse to a string; repeated fields stay a list.
    Requests with any other content type have no form fields.
    """
    if _media_type(environ) != FORM_CONTENT_TYPE:
        return {}

    try:
        fields = parse_qs(_decode_body(buffer_request_body(environ)), keep_blank_values=True)
    except Exception:
        logger.debug("Could not parse form body", exc_info=True)
        return {}

    return {name: values[0] if len(values) == 1 else values for name, values in fields.items()}


def request_url(environ: Mapping[str, Any]) -> str:
    """Reconstruct the full request URL, query string included."""
    try:
        return request_uri(dict(environ), include_query=True)
    except Exception:
        logger.debug("Could not reconstruct request URL", exc_info=True)
        path = environ.get("PATH_INFO") or "/"
        query = environ.get("QUERY_STRING")
        return f"{path}?{query}" if query else str(path)


# =============================================================================
# Authenticated user
# =============================================================================


def remote_user_lookup(environ: Mapping[str, Any]) -> UserContext | None:
    """Resolve the user a front server authenticated via REMOTE_USER."""
    username = environ.get("REMOTE_USER")
    if not username:
        return None
    return UserContext(username=str(username), user_id=str(username))


def resolve_user_context(
    user_lookup: UserLookup | None, environ: Mapping[str, Any]
) -> UserContext | None:
    """
    Call ``user_lookup`` without letting it fail the report.

    Lookups may return a UserContext, a mapping, or any object with
    ``username``/``user_id`` attributes. A missing lookup, a lookup that
    raises, one that returns None, or one whose result does not fit
    UserContext all produce None, which leaves ``context`` out of the notice.
    """
    if user_lookup is None:
        return None
    try:
        result = user_lookup(environ)
        if result is None or isinstance(result, UserContext):
            return result
        user = UserContext.model_validate(result, from_attributes=True)
        if user.username is None and user.user_id is None:
            return None
        return user
    except ValidationError:
        logger.debug("User lookup returned an unusable user; reporting without user context")
        return None
    except Exception:
        logger.debug("User lookup failed; reporting without user context", exc_info=True)
        return None


# =============================================================================
# Request block
# =============================================================================


def build_request_info(
    environ: MutableMapping[str, Any] | None,
    user_lookup: UserLookup | None = None,
) -> RequestInfo | None:
    """
    Assemble the ``request`` block of a notice.

    Args:
        environ: WSGI environ of the failing request
        user_lookup: Optional callable resolving the authenticated user

    Returns:
        The request block, or None when ``environ`` is not a usable mapping
    """
    if not isinstance(environ, MutableMapping):
        return None

    return RequestInfo(
        url=request_url(environ),
        form=collect_form(environ),
        context=resolve_user_context(user_lookup, environ),
        cgi_data=collect_cgi_data(environ),
        params=collect_params(environ),
    )
