"""Platform integrations: Shopify (inbound) and WooCommerce (outbound)."""

from shopify_woo_bridge.integrations.shopify import ShopifyWebhookVerifier
from shopify_woo_bridge.integrations.woocommerce import OrderTransformer, WooCommerceConnector

__all__ = [
    "ShopifyWebhookVerifier",
    "OrderTransformer",
    "WooCommerceConnector",
]
