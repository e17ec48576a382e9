"""Unit tests for Shopify to WooCommerce order mapping."""

import asyncio

import pytest

from shopify_woo_bridge.integrations.woocommerce.mapping import (
    BILLING_FIELD_MAP,
    SHIPPING_FIELD_MAP,
    OrderTransformer,
    map_address_fields,
)
from shopify_woo_bridge.models.shopify import ShopifyAddress, ShopifyOrder
from shopify_woo_bridge.models.woocommerce import ProductRef


class FakeResolver:
    """Resolver serving a fixed SKU -> product id catalog."""

    def __init__(self, catalog: dict[str, int], delays: dict[str, float] | None = None) -> None:
        self.catalog = catalog
        self.delays = delays or {}
        self.calls: list[str | None] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def find_product_by_sku(self, sku: str | None) -> ProductRef | None:
        self.calls.append(sku)
        if not sku:
            return None
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(sku, 0))
        finally:
            self.in_flight -= 1
        product_id = self.catalog.get(sku)
        return ProductRef(id=product_id, sku=sku) if product_id else None


class TestAddressMapping:
    """Tests for the static address field tables."""

    def test_absent_address_is_all_empty(self):
        assert map_address_fields(None, BILLING_FIELD_MAP) == {
            "first_name": "",
            "last_name": "",
            "address_1": "",
            "address_2": "",
            "city": "",
            "state": "",
            "postcode": "",
            "country": "",
            "phone": "",
        }

    def test_renames(self):
        address = ShopifyAddress(
            address1="1 Main St",
            address2=None,
            province_code="ON",
            zip="K1A 0B1",
            country_code="CA",
        )
        fields = map_address_fields(address, SHIPPING_FIELD_MAP)
        assert fields["address_1"] == "1 Main St"
        assert fields["address_2"] == ""
        assert fields["state"] == "ON"
        assert fields["postcode"] == "K1A 0B1"
        assert fields["country"] == "CA"

    def test_shipping_map_has_no_phone(self):
        assert "phone" not in SHIPPING_FIELD_MAP
        assert BILLING_FIELD_MAP["phone"] == "phone"


class TestOrderTransformer:
    """Tests for OrderTransformer.transform."""

    @pytest.mark.asyncio
    async def test_scenario_order_1001(self, sample_order):
        """Order #1001 with one line item and no addresses."""
        order = ShopifyOrder.model_validate(sample_order)
        transformer = OrderTransformer(FakeResolver({"ABC": 42}))

        wc_order = await transformer.transform(order)

        assert wc_order.status == "processing"
        assert len(wc_order.line_items) == 1
        item = wc_order.line_items[0]
        assert item.product_id == 42
        assert item.quantity == 2
        assert item.total == "10.00"
        assert item.sku == "ABC"
        assert item.name == "Widget"
        assert wc_order.meta_value("_shopify_order_id") == "5551234567"
        assert wc_order.meta_value("_shopify_order_number") == "1001"
        assert len(wc_order.meta_data) == 2
        assert wc_order.customer_note == "Order synced from Shopify #1001"

    @pytest.mark.asyncio
    async def test_absent_addresses_yield_empty_blocks(self, sample_order):
        order = ShopifyOrder.model_validate(sample_order)
        wc_order = await OrderTransformer(FakeResolver({})).transform(order)

        payload = wc_order.to_payload()
        assert payload["billing"]["email"] == "buyer@example.com"
        assert all(
            value == "" for key, value in payload["billing"].items() if key != "email"
        )
        assert set(payload["shipping"].values()) == {""}
        assert "phone" not in payload["shipping"]
        assert payload["shipping_lines"] == []

    @pytest.mark.asyncio
    async def test_unresolved_sku_uses_sentinel(self, sample_order):
        order = ShopifyOrder.model_validate(sample_order)
        wc_order = await OrderTransformer(FakeResolver({})).transform(order)
        assert wc_order.line_items[0].product_id == 0

    @pytest.mark.asyncio
    async def test_full_order(self, full_order):
        order = ShopifyOrder.model_validate(full_order)
        resolver = FakeResolver({"SKU-1": 101, "SKU-3": 303})

        wc_order = await OrderTransformer(resolver).transform(order)
        payload = wc_order.to_payload()

        assert payload["billing"] == {
            "first_name": "Bob",
            "last_name": "Norman",
            "address_1": "Chestnut Street 92",
            "address_2": "Apt 4",
            "city": "Louisville",
            "state": "KY",
            "postcode": "40202",
            "country": "US",
            "email": "jon@example.com",
            "phone": "555-625-1199",
        }
        assert payload["shipping"] == {
            "first_name": "Steve",
            "last_name": "Shipper",
            "address_1": "123 Shipping Street",
            "address_2": "",
            "city": "Shippington",
            "state": "KY",
            "postcode": "40003",
            "country": "US",
        }
        assert [item["product_id"] for item in payload["line_items"]] == [101, 0, 303]
        assert payload["shipping_lines"] == [
            {"method_title": "Generic Shipping", "total": "4.00"},
        ]
        assert payload["meta_data"] == [
            {"key": "_shopify_order_id", "value": "820982911946154508"},
            {"key": "_shopify_order_number", "value": "1234"},
        ]

    @pytest.mark.asyncio
    async def test_order_preserved_regardless_of_completion_order(self):
        """Slow early lookups must not reorder line items."""
        skus = [f"SKU-{i}" for i in range(6)]
        order = ShopifyOrder.model_validate({
            "id": 1,
            "order_number": 1,
            "line_items": [{"sku": sku, "quantity": i + 1} for i, sku in enumerate(skus)],
        })
        resolver = FakeResolver(
            {sku: 100 + i for i, sku in enumerate(skus)},
            delays={sku: 0.01 * (len(skus) - i) for i, sku in enumerate(skus)},
        )

        wc_order = await OrderTransformer(resolver).transform(order)

        assert [item.sku for item in wc_order.line_items] == skus
        assert [item.product_id for item in wc_order.line_items] == [100 + i for i in range(6)]
        assert [item.quantity for item in wc_order.line_items] == [1, 2, 3, 4, 5, 6]

    @pytest.mark.asyncio
    async def test_lookups_are_bounded(self):
        skus = [f"SKU-{i}" for i in range(8)]
        order = ShopifyOrder.model_validate({
            "id": 1,
            "order_number": 1,
            "line_items": [{"sku": sku, "quantity": 1} for sku in skus],
        })
        resolver = FakeResolver({}, delays={sku: 0.01 for sku in skus})

        wc_order = await OrderTransformer(resolver, max_concurrency=3).transform(order)

        assert len(wc_order.line_items) == 8
        assert 1 < resolver.max_in_flight <= 3

    @pytest.mark.asyncio
    async def test_partial_resolution_never_raises(self):
        order = ShopifyOrder.model_validate({
            "id": 9,
            "order_number": 9,
            "line_items": [
                {"sku": "A", "quantity": 1},
                {"sku": None, "quantity": 1},
                {"sku": "B", "quantity": 1},
                {"quantity": 1},
            ],
        })
        wc_order = await OrderTransformer(FakeResolver({"B": 2})).transform(order)
        assert [item.product_id for item in wc_order.line_items] == [0, 0, 2, 0]

    @pytest.mark.asyncio
    async def test_no_line_items(self):
        order = ShopifyOrder.model_validate({"id": 1, "order_number": 2, "line_items": None})
        wc_order = await OrderTransformer(FakeResolver({})).transform(order)
        assert wc_order.line_items == []

    @pytest.mark.asyncio
    async def test_null_sku_and_name_omitted_from_payload(self):
        order = ShopifyOrder.model_validate({
            "id": 1,
            "order_number": 2,
            "line_items": [{"quantity": 1, "price": "3.00"}],
        })
        wc_order = await OrderTransformer(FakeResolver({})).transform(order)
        assert wc_order.to_payload()["line_items"] == [
            {"product_id": 0, "quantity": 1, "total": "3.00"},
        ]


class TestShopifyOrderModel:
    """Tests for parsing Shopify payloads."""

    def test_numeric_price_coerced_to_string(self):
        order = ShopifyOrder.model_validate({
            "id": 1,
            "order_number": 1,
            "line_items": [{"sku": "A", "quantity": 1, "price": 10.5}],
            "shipping_lines": [{"title": "Express", "price": 7}],
        })
        assert order.line_items[0].price == "10.5"
        assert order.shipping_lines[0].price == "7"

    def test_null_shipping_lines(self):
        order = ShopifyOrder.model_validate({"id": 1, "order_number": 1, "shipping_lines": None})
        assert order.shipping_lines == []

    def test_unknown_fields_ignored(self):
        order = ShopifyOrder.model_validate({
            "id": 1,
            "order_number": 1,
            "financial_status": "paid",
            "customer": {"id": 7},
        })
        assert order.id == 1
