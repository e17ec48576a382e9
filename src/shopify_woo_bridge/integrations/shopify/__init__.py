"""Shopify integration for inbound order webhooks."""

from shopify_woo_bridge.integrations.shopify.webhooks import (
    SIGNATURE_HEADER,
    ShopifyWebhookVerifier,
)

__all__ = [
    "SIGNATURE_HEADER",
    "ShopifyWebhookVerifier",
]
