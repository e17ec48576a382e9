"""Shopify orders/create webhook processing.

A webhook moves through these states:

    RECEIVED -> VERIFYING -> REJECTED
                          -> TRANSFORMING -> SUBMITTING -> COMPLETED
                                          -> FAILED

Signature verification always runs on the raw body before any parsing.
Nothing is retried here; Shopify redelivers on any non-2xx response.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from pydantic import ValidationError

from shopify_woo_bridge.exceptions import (
    BridgeError,
    MalformedPayloadError,
    WebhookAuthenticationError,
)
from shopify_woo_bridge.integrations.shopify.webhooks import ShopifyWebhookVerifier
from shopify_woo_bridge.integrations.woocommerce.mapping import OrderTransformer
from shopify_woo_bridge.models.shopify import ShopifyOrder
from shopify_woo_bridge.observability.logging import LogContext

logger = logging.getLogger(__name__)


class WebhookState(str, Enum):
    """Processing states of a single webhook delivery."""

    RECEIVED = "received"
    VERIFYING = "verifying"
    REJECTED = "rejected"
    TRANSFORMING = "transforming"
    SUBMITTING = "submitting"
    COMPLETED = "completed"
    FAILED = "failed"


_STATUS_CODES = {
    WebhookState.COMPLETED: 200,
    WebhookState.REJECTED: 401,
    WebhookState.FAILED: 500,
}


@dataclass
class WebhookResult:
    """Terminal outcome of handling one webhook."""

    state: WebhookState
    wc_order_id: int | str | None = None
    shopify_order_number: str | None = None
    error: str | None = None
    detail: Any = None

    @property
    def status_code(self) -> int:
        return _STATUS_CODES.get(self.state, 500)

    @property
    def succeeded(self) -> bool:
        return self.state == WebhookState.COMPLETED

    def to_response(self) -> dict[str, Any]:
        """JSON body relayed to the webhook sender."""
        if self.succeeded:
            return {
                "success": True,
                "wc_order_id": self.wc_order_id,
                "downstream_order_id": self.wc_order_id,
            }
        body: dict[str, Any] = {"success": False, "error": self.error}
        if self.detail is not None and self.detail != self.error:
            body["detail"] = self.detail
        return body


class OrderSubmitter(Protocol):
    async def create_order(self, payload: dict[str, Any]) -> dict[str, Any]: ...


class OrderWebhookHandler:
    """
    Handles Shopify orders/create webhooks end to end.

    Verifies the signature, parses and transforms the order, and creates
    it in WooCommerce.
    """

    def __init__(
        self,
        verifier: ShopifyWebhookVerifier,
        transformer: OrderTransformer,
        submitter: OrderSubmitter,
    ) -> None:
        """
        Initialize the handler.

        Args:
            verifier: Signature verifier holding the Shopify webhook secret.
            transformer: Shopify to WooCommerce order transformer.
            submitter: Client that creates orders in WooCommerce.
        """
        self.verifier = verifier
        self.transformer = transformer
        self.submitter = submitter

    def parse_order(self, raw_body: bytes) -> ShopifyOrder:
        """Parse the raw body as a Shopify order."""
        try:
            return ShopifyOrder.model_validate_json(raw_body)
        except ValidationError as e:
            raise MalformedPayloadError(str(e)) from e

    async def handle(self, raw_body: bytes, signature: str | None) -> WebhookResult:
        """
        Process one webhook delivery.

        Args:
            raw_body: Request body exactly as received.
            signature: X-Shopify-Hmac-Sha256 header value, if present.

        Returns:
            The terminal WebhookResult (COMPLETED, REJECTED, or FAILED).
        """
        state = WebhookState.RECEIVED
        logger.debug(f"Webhook {state.value}: {len(raw_body)} bytes")

        state = WebhookState.VERIFYING
        if not self.verifier.verify_signature(raw_body, signature):
            error = WebhookAuthenticationError()
            logger.warning(error.message)
            return WebhookResult(state=WebhookState.REJECTED, error=error.message)

        with LogContext() as log_context:
            order_number: str | None = None
            try:
                state = WebhookState.TRANSFORMING
                order = self.parse_order(raw_body)
                order_number = str(order.order_number)
                log_context.update(shopify_order_number=order_number)
                logger.info(f"Received Shopify order: #{order_number}")

                wc_order = await self.transformer.transform(order)

                state = WebhookState.SUBMITTING
                created = await self.submitter.create_order(wc_order.to_payload())
                wc_order_id = created["id"]
            except BridgeError as e:
                logger.error(
                    f"Error processing webhook while {state.value}: {e.message}"
                    + (f" ({e.detail})" if e.detail != e.message else "")
                )
                return WebhookResult(
                    state=WebhookState.FAILED,
                    shopify_order_number=order_number,
                    error=e.message,
                    detail=e.detail,
                )
            except Exception as e:
                logger.exception(f"Unexpected error processing webhook while {state.value}")
                return WebhookResult(
                    state=WebhookState.FAILED,
                    shopify_order_number=order_number,
                    error=str(e) or type(e).__name__,
                )

            logger.info(f"WooCommerce order created: #{wc_order_id} (Shopify #{order_number})")
            return WebhookResult(
                state=WebhookState.COMPLETED,
                wc_order_id=wc_order_id,
                shopify_order_number=order_number,
            )
