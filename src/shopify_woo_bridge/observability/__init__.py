"""Observability module for logging and request correlation."""

from shopify_woo_bridge.observability.context import (
    get_current_request_id,
    get_log_fields,
    request_context,
)
from shopify_woo_bridge.observability.logging import LogContext, configure_logging

__all__ = [
    "LogContext",
    "configure_logging",
    "get_current_request_id",
    "get_log_fields",
    "request_context",
]
