"""FastAPI application server."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shopify_woo_bridge.api.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from shopify_woo_bridge.api.webhooks import router as webhooks_router
from shopify_woo_bridge.config import Settings, get_settings
from shopify_woo_bridge.exceptions import BridgeError
from shopify_woo_bridge.handler import OrderWebhookHandler
from shopify_woo_bridge.integrations.shopify.webhooks import ShopifyWebhookVerifier
from shopify_woo_bridge.integrations.woocommerce.connector import WooCommerceConnector
from shopify_woo_bridge.integrations.woocommerce.mapping import OrderTransformer
from shopify_woo_bridge.observability.logging import configure_logging

logger = logging.getLogger(__name__)


def build_webhook_handler(
    settings: Settings,
    connector: WooCommerceConnector,
) -> OrderWebhookHandler:
    """Wire the verifier, transformer and connector from explicit settings."""
    return OrderWebhookHandler(
        verifier=ShopifyWebhookVerifier(settings.shopify_webhook_secret),
        transformer=OrderTransformer(
            resolver=connector,
            max_concurrency=settings.sku_lookup_concurrency,
        ),
        submitter=connector,
    )


def log_environment_check(settings: Settings) -> None:
    """Log presence of required settings; missing ones warn but don't stop startup."""
    logger.info("Environment check:")
    for name, is_set in settings.required_status().items():
        if is_set:
            logger.info(f"- {name}: Set")
        else:
            logger.warning(f"- {name}: MISSING")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan manager.

    Builds the WooCommerce connector and webhook handler on startup and
    closes the HTTP client on shutdown.
    """
    settings: Settings = app.state.settings

    configure_logging(level=settings.log_level, json_format=settings.log_json)
    logger.info("Starting order bridge...")
    log_environment_check(settings)

    connector = WooCommerceConnector(
        store_url=settings.woocommerce_store_url,
        consumer_key=settings.woocommerce_consumer_key,
        consumer_secret=settings.woocommerce_consumer_secret,
        timeout=settings.woocommerce_timeout_seconds,
    )
    app.state.connector = connector
    app.state.webhook_handler = build_webhook_handler(settings, connector)
    logger.info(f"Webhook server running on port {settings.port}")

    yield

    logger.info("Shutting down order bridge...")
    await connector.close()
    app.state.webhook_handler = None
    app.state.connector = None
    logger.info("Shutdown complete")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description=(
            "Receives Shopify order webhooks and creates the matching "
            "orders in WooCommerce."
        ),
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.webhook_handler = None
    app.state.connector = None

    # Domain exception handler: map BridgeError to JSON response
    @app.exception_handler(BridgeError)
    async def bridge_error_handler(request: Request, exc: BridgeError) -> JSONResponse:
        content: dict[str, Any] = {"success": False, "error": exc.message}
        if exc.detail != exc.message:
            content["detail"] = exc.detail
        return JSONResponse(status_code=exc.status_code, content=content)

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    @app.get("/health", summary="Liveness probe")
    async def health() -> dict[str, str]:
        """Liveness: always 200 while the process is serving requests."""
        return {
            "status": "ok",
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
        }

    app.include_router(webhooks_router)

    return app


# Create app instance
app = create_app()


def main() -> None:
    """Run the server with uvicorn on the configured host and port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "shopify_woo_bridge.api.server:app",
        host=settings.host,
        port=settings.port,
    )
