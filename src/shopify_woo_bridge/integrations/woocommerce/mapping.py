"""Mapping from Shopify orders to WooCommerce order-creation payloads."""

import asyncio
import logging
from typing import Protocol

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

logger = logging.getLogger(__name__)

# WooCommerce field -> Shopify address field. Missing values become "".
SHIPPING_FIELD_MAP: dict[str, str] = {
    "first_name": "first_name",
    "last_name": "last_name",
    "address_1": "address1",
    "address_2": "address2",
    "city": "city",
    "state": "province_code",
    "postcode": "zip",
    "country": "country_code",
}

BILLING_FIELD_MAP: dict[str, str] = {
    **SHIPPING_FIELD_MAP,
    "phone": "phone",
}

META_SHOPIFY_ORDER_ID = "_shopify_order_id"
META_SHOPIFY_ORDER_NUMBER = "_shopify_order_number"

CUSTOMER_NOTE_TEMPLATE = "Order synced from Shopify #{order_number}"


class ProductResolver(Protocol):
    async def find_product_by_sku(self, sku: str | None) -> ProductRef | None: ...


def map_address_fields(
    address: ShopifyAddress | None,
    field_map: dict[str, str],
) -> dict[str, str]:
    """Apply ``field_map`` to an address, defaulting every absent value to ""."""
    return {
        target: (getattr(address, source, None) or "") if address else ""
        for target, source in field_map.items()
    }


def map_billing(order: ShopifyOrder) -> WooCommerceBilling:
    """Billing block from the Shopify billing address and order email."""
    fields = map_address_fields(order.billing_address, BILLING_FIELD_MAP)
    return WooCommerceBilling(**fields, email=order.email or "")


def map_shipping(order: ShopifyOrder) -> WooCommerceShipping:
    """Shipping block; Shopify has no shipping-level phone to carry over."""
    return WooCommerceShipping(**map_address_fields(order.shipping_address, SHIPPING_FIELD_MAP))


def map_shipping_line(line: ShopifyShippingLine) -> WooCommerceShippingLine:
    return WooCommerceShippingLine(method_title=line.title, total=line.price)


def map_line_item(item: ShopifyLineItem, product: ProductRef | None) -> WooCommerceLineItem:
    """
    Map a Shopify line item.

    ``total`` carries the Shopify unit price, matching what the store
    has always received from this sync.
    """
    return WooCommerceLineItem(
        product_id=product.id if product else UNRESOLVED_PRODUCT_ID,
        quantity=item.quantity,
        total=item.price,
        sku=item.sku,
        name=item.name,
    )


def build_meta_data(order: ShopifyOrder) -> list[WooCommerceMetaData]:
    """Meta entries linking the WooCommerce order back to its Shopify origin."""
    return [
        WooCommerceMetaData(key=META_SHOPIFY_ORDER_ID, value=str(order.id)),
        WooCommerceMetaData(key=META_SHOPIFY_ORDER_NUMBER, value=str(order.order_number)),
    ]


class OrderTransformer:
    """
    Transforms Shopify orders into WooCommerce orders.

    Each line item's WooCommerce product is resolved by SKU. Lookups run
    concurrently (bounded by ``max_concurrency``) and are joined before
    the order is assembled; results are placed by line-item index, so
    output order always matches input order. An unresolved SKU yields
    product id 0 instead of dropping the item.
    """

    def __init__(self, resolver: ProductResolver, max_concurrency: int = 10) -> None:
        self.resolver = resolver
        self.max_concurrency = max_concurrency

    async def resolve_products(self, items: list[ShopifyLineItem]) -> list[ProductRef | None]:
        """Resolve products for ``items``, returning one entry per item in order."""
        semaphore = asyncio.Semaphore(self.max_concurrency)
        resolved: list[ProductRef | None] = [None] * len(items)

        async def resolve_at(index: int, item: ShopifyLineItem) -> None:
            async with semaphore:
                resolved[index] = await self.resolver.find_product_by_sku(item.sku)

        await asyncio.gather(*[
            resolve_at(index, item)
            for index, item in enumerate(items)
        ])
        return resolved

    async def transform(self, order: ShopifyOrder) -> WooCommerceOrder:
        """Build the WooCommerce order-creation payload for ``order``."""
        products = await self.resolve_products(order.line_items)

        unresolved = sum(1 for product in products if product is None)
        if unresolved:
            logger.info(
                f"Order #{order.order_number}: {unresolved} of {len(products)} "
                f"line items had no matching WooCommerce product"
            )

        return WooCommerceOrder(
            status=ORDER_STATUS_PROCESSING,
            billing=map_billing(order),
            shipping=map_shipping(order),
            line_items=[
                map_line_item(item, product)
                for item, product in zip(order.line_items, products)
            ],
            shipping_lines=[map_shipping_line(line) for line in order.shipping_lines],
            customer_note=CUSTOMER_NOTE_TEMPLATE.format(order_number=order.order_number),
            meta_data=build_meta_data(order),
        )
