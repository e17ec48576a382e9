"""Request context propagation using contextvars."""

from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

# Context variable for the current request ID
_current_request_id: ContextVar[str | None] = ContextVar("current_request_id", default=None)


def get_current_request_id() -> str | None:
    """
    Get the current request ID from context.

    Returns:
        The current request ID, or None outside of a request.
    """
    return _current_request_id.get()


@contextmanager
def request_context(request_id: str) -> Generator[str, None, None]:
    """
    Context manager binding a request ID for the duration of a request.

    Usage:
        with request_context("req-123"):
            logger.info("Handling")  # log record carries request_id
    """
    token = _current_request_id.set(request_id)
    try:
        yield request_id
    finally:
        _current_request_id.reset(token)


# Extra structured fields bound by LogContext for the current task
_log_fields: ContextVar[dict[str, Any] | None] = ContextVar("log_fields", default=None)


def get_log_fields() -> dict[str, Any]:
    """Fields bound by the innermost active LogContext, or an empty dict."""
    return _log_fields.get() or {}
