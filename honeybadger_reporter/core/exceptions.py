"""Root-cause resolution for chained exceptions."""

from __future__ import annotations

from collections.abc import Iterator


def _next_in_chain(exc: BaseException) -> BaseException | None:
    if exc.__cause__ is not None:
        return exc.__cause__
    if exc.__context__ is not None and not exc.__suppress_context__:
        return exc.__context__
    return None


def iter_exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """
    Yield ``exc`` and every exception it wraps, outermost first.

    Follows ``__cause__`` and, unless suppressed with ``raise ... from None``,
    ``__context__``. Each exception is yielded at most once, so cyclic
    chains still end.
    """
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = _next_in_chain(current)


def resolve_root_cause(exc: BaseException) -> BaseException:
    """Return the innermost exception of the chain, or ``exc`` if unchained."""
    root = exc
    for root in iter_exception_chain(exc):
        pass
    return root
