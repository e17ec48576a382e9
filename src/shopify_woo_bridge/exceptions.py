"""Domain exceptions for the order bridge.

These map to consistent HTTP responses when handled by the global exception handler.
"""

from typing import Any


class BridgeError(Exception):
    """Base exception for order bridge domain errors."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int = 500,
        detail: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail if detail is not None else message


class WebhookAuthenticationError(BridgeError):
    """Raised when a webhook signature is missing or does not match."""

    def __init__(self, message: str = "Invalid webhook signature") -> None:
        super().__init__(message, status_code=401)


class MalformedPayloadError(BridgeError):
    """Raised when a webhook body cannot be parsed as a Shopify order."""

    def __init__(self, message: str, detail: Any = None) -> None:
        super().__init__(message, status_code=500, detail=detail)


class DownstreamLookupError(BridgeError):
    """A WooCommerce product lookup failed.

    The product resolver logs and absorbs this; it never reaches a caller.
    """

    def __init__(self, sku: str, message: str) -> None:
        super().__init__(message, status_code=502)
        self.sku = sku


class DownstreamSubmissionError(BridgeError):
    """Raised when WooCommerce rejects or fails an order-creation request."""

    def __init__(
        self,
        message: str,
        *,
        upstream_status: int | None = None,
        detail: Any = None,
    ) -> None:
        super().__init__(message, status_code=500, detail=detail)
        self.upstream_status = upstream_status


class ServiceNotReadyError(BridgeError):
    """Raised when a request arrives before the service components are built."""

    def __init__(self, message: str = "Service not initialized") -> None:
        super().__init__(message, status_code=503)
