"""WooCommerce integration for product lookup and order creation."""

from shopify_woo_bridge.integrations.woocommerce.connector import WooCommerceConnector
from shopify_woo_bridge.integrations.woocommerce.mapping import (
    BILLING_FIELD_MAP,
    SHIPPING_FIELD_MAP,
    OrderTransformer,
)

__all__ = [
    "WooCommerceConnector",
    "OrderTransformer",
    "BILLING_FIELD_MAP",
    "SHIPPING_FIELD_MAP",
]
