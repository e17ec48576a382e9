"""Inbound Shopify order models (orders/create webhook payload)."""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator


def _money_to_str(value: Any) -> Any:
    """Shopify sends money as strings; tolerate bare JSON numbers."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return value


Money = Annotated[str | None, BeforeValidator(_money_to_str)]


class _ShopifyModel(BaseModel):
    """Immutable model that ignores the many Shopify fields not mapped downstream."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class ShopifyAddress(_ShopifyModel):
    """Billing or shipping address. Every field is optional."""

    first_name: str | None = None
    last_name: str | None = None
    address1: str | None = None
    address2: str | None = None
    city: str | None = None
    province_code: str | None = None
    zip: str | None = None
    country_code: str | None = None
    phone: str | None = None


class ShopifyLineItem(_ShopifyModel):
    """Order line item."""

    sku: str | None = None
    quantity: int = 0
    price: Money = None
    name: str | None = None


class ShopifyShippingLine(_ShopifyModel):
    """Shipping method charged on the order."""

    title: str | None = None
    price: Money = None


class ShopifyOrder(_ShopifyModel):
    """
    Shopify order as delivered by the orders/create webhook.

    Only the fields needed to build the WooCommerce order are modelled.
    ``id`` and ``order_number`` are required because the downstream
    order is tagged with both.
    """

    id: int | str
    order_number: int | str
    email: str | None = None
    line_items: list[ShopifyLineItem] = Field(default_factory=list)
    billing_address: ShopifyAddress | None = None
    shipping_address: ShopifyAddress | None = None
    shipping_lines: list[ShopifyShippingLine] = Field(default_factory=list)

    @field_validator("line_items", "shipping_lines", mode="before")
    @classmethod
    def _null_list_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value
