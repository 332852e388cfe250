"""
Honeybadger error reporter - builds notices for failed web requests and
delivers them to the Honeybadger notices API.

Subpackages:
- core: Notice models, harvesters, configuration and the HTTP client
"""

from honeybadger_reporter.core.config import ConfigurationError, HoneybadgerConfig
from honeybadger_reporter.core.error_reporting import report_exception_or_log
from honeybadger_reporter.core.notice import ErrorReport, StackFrame, UserContext
from honeybadger_reporter.middleware import HoneybadgerMiddleware
from honeybadger_reporter.service import HoneybadgerService

__all__ = [
    "ConfigurationError",
    "ErrorReport",
    "HoneybadgerConfig",
    "HoneybadgerMiddleware",
    "HoneybadgerService",
    "StackFrame",
    "UserContext",
    "report_exception_or_log",
]
