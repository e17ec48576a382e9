"""Structured JSON logging with request correlation."""

import json
import logging
import sys
from contextvars import Token
from datetime import datetime, timezone
from typing import Any

from shopify_woo_bridge.observability.context import (
    _log_fields,
    get_current_request_id,
    get_log_fields,
)


class StructuredLogFormatter(logging.Formatter):
    """
    JSON log formatter with request correlation.

    Outputs logs in JSON format with:
    - Standard log fields (timestamp, level, message, logger)
    - Request correlation (request_id)
    - Exception information
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON."""
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = get_current_request_id()
        if request_id:
            log_entry["request_id"] = request_id

        log_entry["location"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }

        # Fields attached through LogContext
        extra = getattr(record, "extra", None) or get_log_fields()
        if extra:
            log_entry["extra"] = extra

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class RequestContextFilter(logging.Filter):
    """Logging filter that adds the request ID and LogContext fields to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_current_request_id() or ""
        record.extra = dict(get_log_fields())
        return True


def configure_logging(level: str = "INFO", json_format: bool = True) -> None:
    """
    Configure structured logging for the application.

    Args:
        level: Default log level.
        json_format: If True, use JSON format. Otherwise, use standard format.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)

    if json_format:
        handler.setFormatter(StructuredLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"
        ))

    handler.addFilter(RequestContextFilter())
    root_logger.addHandler(handler)

    # Reduce noise from common libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logging.info(f"Logging configured: level={level}, json={json_format}")


class LogContext:
    """
    Context manager for adding extra fields to logs.

    Fields live in a ContextVar, so concurrent tasks each see only their own.

    Usage:
        with LogContext(shopify_order_number="1001"):
            logger.info("Transforming order")  # Includes extra fields
    """

    def __init__(self, **kwargs: Any) -> None:
        self.extra = kwargs
        self._token: Token | None = None

    def __enter__(self) -> "LogContext":
        self._token = _log_fields.set({**get_log_fields(), **self.extra})
        return self

    def __exit__(self, *args) -> None:
        if self._token is not None:
            _log_fields.reset(self._token)
            self._token = None

    def update(self, **kwargs: Any) -> None:
        """Add fields to the active context."""
        self.extra.update(kwargs)
        _log_fields.set({**get_log_fields(), **kwargs})
