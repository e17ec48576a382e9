"""Pytest configuration and fixtures."""

import base64
import hashlib
import hmac
import json
import os
import sys
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

# Set test environment variables
os.environ.setdefault("SHOPIFY_WEBHOOK_SECRET", "test-webhook-secret")
os.environ.setdefault("WC_URL", "https://test-store.com")
os.environ.setdefault("WC_CONSUMER_KEY", "ck_test")
os.environ.setdefault("WC_CONSUMER_SECRET", "cs_test")
os.environ.setdefault("LOG_JSON", "false")

WEBHOOK_SECRET = "test-webhook-secret"


def sign(body: bytes, secret: str = WEBHOOK_SECRET) -> str:
    """Shopify-style base64 HMAC-SHA256 of ``body``."""
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def webhook_secret() -> str:
    return WEBHOOK_SECRET


@pytest.fixture
def signer():
    """The signing function Shopify uses, for building test requests."""
    return sign


@pytest.fixture
def sample_order() -> dict:
    """Minimal Shopify order #1001 with one line item and no addresses."""
    return {
        "id": 5551234567,
        "order_number": 1001,
        "email": "buyer@example.com",
        "line_items": [
            {"sku": "ABC", "quantity": 2, "price": "10.00", "name": "Widget"},
        ],
    }


@pytest.fixture
def full_order() -> dict:
    """Shopify order with addresses, several line items and shipping."""
    return {
        "id": 820982911946154508,
        "order_number": 1234,
        "email": "jon@example.com",
        "financial_status": "paid",
        "line_items": [
            {"sku": "SKU-1", "quantity": 1, "price": "199.00", "name": "IPod Nano - 8gb"},
            {"sku": "", "quantity": 3, "price": "5.50", "name": "Gift wrap"},
            {"sku": "SKU-3", "quantity": 2, "price": "12.00", "name": "Case"},
        ],
        "billing_address": {
            "first_name": "Bob",
            "last_name": "Norman",
            "address1": "Chestnut Street 92",
            "address2": "Apt 4",
            "city": "Louisville",
            "province_code": "KY",
            "zip": "40202",
            "country_code": "US",
            "phone": "555-625-1199",
        },
        "shipping_address": {
            "first_name": "Steve",
            "last_name": "Shipper",
            "address1": "123 Shipping Street",
            "address2": None,
            "city": "Shippington",
            "province_code": "KY",
            "zip": "40003",
            "country_code": "US",
            "phone": "555-555-SHIP",
        },
        "shipping_lines": [
            {"title": "Generic Shipping", "price": "4.00"},
        ],
    }


@pytest.fixture
def sample_body(sample_order: dict) -> bytes:
    return json.dumps(sample_order).encode("utf-8")
