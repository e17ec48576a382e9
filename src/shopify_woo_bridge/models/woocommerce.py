"""Outbound WooCommerce REST v3 order-creation models."""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field

# Product id sent when no WooCommerce product matches the line item's SKU
UNRESOLVED_PRODUCT_ID = 0

ORDER_STATUS_PROCESSING = "processing"


@dataclass(frozen=True)
class ProductRef:
    """WooCommerce product matched by SKU."""

    id: int
    sku: str
    name: str = ""


class WooCommerceBilling(BaseModel):
    """Billing block. Absent source values are sent as empty strings."""

    first_name: str = ""
    last_name: str = ""
    address_1: str = ""
    address_2: str = ""
    city: str = ""
    state: str = ""
    postcode: str = ""
    country: str = ""
    email: str = ""
    phone: str = ""


class WooCommerceShipping(BaseModel):
    """Shipping block. WooCommerce shipping has no email and no phone here."""

    first_name: str = ""
    last_name: str = ""
    address_1: str = ""
    address_2: str = ""
    city: str = ""
    state: str = ""
    postcode: str = ""
    country: str = ""


class WooCommerceLineItem(BaseModel):
    product_id: int = UNRESOLVED_PRODUCT_ID
    quantity: int
    total: str | None = None
    sku: str | None = None
    name: str | None = None


class WooCommerceShippingLine(BaseModel):
    method_title: str | None = None
    total: str | None = None


class WooCommerceMetaData(BaseModel):
    key: str
    value: str


class WooCommerceOrder(BaseModel):
    """Payload for POST /wp-json/wc/v3/orders."""

    status: str = ORDER_STATUS_PROCESSING
    billing: WooCommerceBilling = Field(default_factory=WooCommerceBilling)
    shipping: WooCommerceShipping = Field(default_factory=WooCommerceShipping)
    line_items: list[WooCommerceLineItem] = Field(default_factory=list)
    shipping_lines: list[WooCommerceShippingLine] = Field(default_factory=list)
    customer_note: str = ""
    meta_data: list[WooCommerceMetaData] = Field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready request body; unset optional line fields are omitted."""
        return self.model_dump(mode="json", exclude_none=True)

    def meta_value(self, key: str) -> str | None:
        """Look up a meta_data value by key."""
        for entry in self.meta_data:
            if entry.key == key:
                return entry.value
        return None
