"""Shopify to WooCommerce order bridge."""

__version__ = "0.1.0"
