"""Assertion helpers shared by test modules."""

from __future__ import annotations

from contextlib import contextmanager


@contextmanager
def not_raises(exc_type: type[BaseException]):
    """Fail the test, rather than error it, when ``exc_type`` escapes the block."""
    try:
        yield
    except exc_type as exc:
        raise AssertionError(f"unexpected {type(exc).__name__}: {exc}") from exc
