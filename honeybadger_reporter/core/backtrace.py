"""
Backtrace extraction for reported exceptions.

Walks the traceback attached to a single exception and converts each frame
into a StackFrame. Only the exception's own traceback is used; chained
causes are not merged in.

Missing frame detail degrades the frame, never the extraction:

- no line number -> 0
- no file name -> None
- no function name -> "unknown"
"""

from __future__ import annotations

import logging
import traceback

from honeybadger_reporter.core.notice import StackFrame


logger = logging.getLogger(__name__)

UNKNOWN_METHOD = "unknown"


def _frame_from_summary(summary: traceback.FrameSummary) -> StackFrame:
    return StackFrame(
        number=summary.lineno or 0,
        file=summary.filename or None,
        method=summary.name or UNKNOWN_METHOD,
    )


def extract_backtrace(exc: BaseException) -> list[StackFrame]:
    """
    Build the ordered frame list for ``exc``, outermost call first.

    Args:
        exc: The exception whose traceback should be walked

    Returns:
        One StackFrame per traceback entry; empty if the exception was never
        raised or the traceback cannot be read
    """
    tb = getattr(exc, "__traceback__", None)
    if tb is None:
        return []

    try:
        summaries = traceback.extract_tb(tb)
    except Exception:
        logger.debug("Could not walk traceback for %s", type(exc).__name__, exc_info=True)
        return []

    return [_frame_from_summary(summary) for summary in summaries]
