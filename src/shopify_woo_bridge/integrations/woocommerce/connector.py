"""WooCommerce REST API connector for product lookup and order creation."""

import logging
from typing import Any

import httpx

from shopify_woo_bridge.exceptions import DownstreamLookupError, DownstreamSubmissionError
from shopify_woo_bridge.models.woocommerce import ProductRef

logger = logging.getLogger(__name__)


class WooCommerceConnector:
    """
    WooCommerce REST API connector.

    Looks up catalog products by SKU and creates orders via the
    WooCommerce REST API (v3).

    Authentication uses Basic Auth with consumer key/secret.
    """

    API_VERSION = "wc/v3"

    def __init__(
        self,
        store_url: str,
        consumer_key: str,
        consumer_secret: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the WooCommerce connector.

        Args:
            store_url: The WooCommerce store URL (e.g., "https://mystore.com").
            consumer_key: WooCommerce REST API consumer key.
            consumer_secret: WooCommerce REST API consumer secret.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self.store_url = store_url.rstrip("/")
        self.consumer_key = consumer_key
        self.consumer_secret = consumer_secret
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return f"{self.store_url}/wp-json/{self.API_VERSION}"

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            # WooCommerce uses Basic Auth with consumer key/secret
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                auth=(self.consumer_key, self.consumer_secret),
                headers={
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _search_products(self, sku: str) -> list[dict[str, Any]]:
        """GET /products?sku=... raising DownstreamLookupError on any failure."""
        try:
            response = await self.client.get("/products", params={"sku": sku})
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise DownstreamLookupError(sku, f"{type(e).__name__}: {e}") from e
        except ValueError as e:
            raise DownstreamLookupError(sku, f"Invalid JSON from product search: {e}") from e

        if not isinstance(data, list):
            raise DownstreamLookupError(
                sku, f"Unexpected product search response type: {type(data).__name__}"
            )
        return data

    async def find_product_by_sku(self, sku: str | None) -> ProductRef | None:
        """
        Find a WooCommerce product by SKU.

        Lookup is best-effort: a failed search is logged and reported as
        "not found" so that one bad line item cannot block the order.

        Args:
            sku: Merchant SKU from the Shopify line item.

        Returns:
            The first matching product, or None.
        """
        if not sku:
            return None

        try:
            products = await self._search_products(sku)
        except DownstreamLookupError as e:
            logger.warning(f"Error finding product with SKU {sku}: {e.message}")
            return None

        if not products:
            logger.info(f"No WooCommerce product found for SKU {sku}")
            return None

        first = products[0]
        try:
            product_id = int(first["id"])
        except (TypeError, KeyError, ValueError):
            logger.warning(f"Product search for SKU {sku} returned an entry without a usable id")
            return None

        return ProductRef(
            id=product_id,
            sku=str(first.get("sku") or sku),
            name=str(first.get("name") or ""),
        )

    async def create_order(self, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Create an order via POST /orders.

        Args:
            payload: WooCommerce order-creation body.

        Returns:
            The created order as returned by WooCommerce.

        Raises:
            DownstreamSubmissionError: If the request fails or is rejected.
        """
        try:
            response = await self.client.post("/orders", json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            detail = _response_detail(e.response)
            raise DownstreamSubmissionError(
                _error_message(detail, default=str(e)),
                upstream_status=e.response.status_code,
                detail=detail,
            ) from e
        except httpx.HTTPError as e:
            raise DownstreamSubmissionError(f"{type(e).__name__}: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise DownstreamSubmissionError(
                f"Invalid JSON in order creation response: {e}",
                upstream_status=response.status_code,
            ) from e

        if not isinstance(data, dict) or data.get("id") is None:
            raise DownstreamSubmissionError(
                "Order creation response did not include an order id",
                upstream_status=response.status_code,
                detail=data,
            )
        return data


def _response_detail(response: httpx.Response) -> Any:
    """Decoded error body, falling back to raw text."""
    try:
        return response.json()
    except ValueError:
        return response.text or None


def _error_message(detail: Any, default: str) -> str:
    """WooCommerce errors look like {"code": ..., "message": ..., "data": {...}}."""
    if isinstance(detail, dict) and detail.get("message"):
        return str(detail["message"])
    return default
