"""Data models for the order bridge."""

from shopify_woo_bridge.models.shopify import (
    ShopifyAddress,
    ShopifyLineItem,
    ShopifyOrder,
    ShopifyShippingLine,
)
from shopify_woo_bridge.models.woocommerce import (
    ORDER_STATUS_PROCESSING,
    UNRESOLVED_PRODUCT_ID,
    ProductRef,
    WooCommerceBilling,
    WooCommerceLineItem,
    WooCommerceMetaData,
    WooCommerceOrder,
    WooCommerceShipping,
    WooCommerceShippingLine,
)

__all__ = [
    # Shopify
    "ShopifyAddress",
    "ShopifyLineItem",
    "ShopifyOrder",
    "ShopifyShippingLine",
    # WooCommerce
    "ORDER_STATUS_PROCESSING",
    "UNRESOLVED_PRODUCT_ID",
    "ProductRef",
    "WooCommerceBilling",
    "WooCommerceLineItem",
    "WooCommerceMetaData",
    "WooCommerceOrder",
    "WooCommerceShipping",
    "WooCommerceShippingLine",
]
