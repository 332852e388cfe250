"""
WSGI middleware that reports uncaught exceptions to Honeybadger.

    >>> from honeybadger_reporter import HoneybadgerConfig, HoneybadgerService
    >>> service = HoneybadgerService(HoneybadgerConfig.from_env())
    >>> application = HoneybadgerMiddleware(application, service)
"""

from __future__ import annotations

import logging

from honeybadger_reporter.core.error_reporting import report_exception_or_log
from honeybadger_reporter.core.request_context import buffer_request_body


logger = logging.getLogger(__name__)


class HoneybadgerMiddleware:
    def __init__(self, application, service):
        self.application = application
        self.service = service

    def __call__(self, environ, start_response):
        # Buffer before the app consumes wsgi.input so the body can be reported.
        try:
            buffer_request_body(environ)
        except Exception:
            logger.debug("Could not buffer request body", exc_info=True)

        try:
            iterable = self.application(environ, start_response)
            try:
                yield from iterable
            finally:
                close = getattr(iterable, "close", None)
                if close is not None:
                    close()
        except Exception as exc:
            self.handle_exception(exc, environ)
            raise

    def handle_exception(self, exc, environ):
        return report_exception_or_log(self.service, exc, environ)
