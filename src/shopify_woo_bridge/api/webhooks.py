"""Webhook receiver endpoints for Shopify order events."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from shopify_woo_bridge.config import Settings
from shopify_woo_bridge.exceptions import ServiceNotReadyError
from shopify_woo_bridge.handler import OrderWebhookHandler, WebhookState

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhook", tags=["webhooks"])


def get_webhook_handler(request: Request) -> OrderWebhookHandler:
    """Get the webhook handler built during application startup."""
    handler = getattr(request.app.state, "webhook_handler", None)
    if handler is None:
        raise ServiceNotReadyError("Webhook handler not initialized")
    return handler


def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


@router.post(
    "/shopify/order-create",
    summary="Receive Shopify orders/create webhooks",
    description="Verifies the webhook, then creates the matching WooCommerce order.",
    response_model=None,
)
async def receive_shopify_order_create(
    request: Request,
    x_shopify_hmac_sha256: str | None = Header(
        default=None,
        alias="X-Shopify-Hmac-Sha256",
        description="Base64 HMAC-SHA256 signature of the raw body",
    ),
    x_shopify_topic: str | None = Header(default=None, alias="X-Shopify-Topic"),
    x_shopify_shop_domain: str | None = Header(default=None, alias="X-Shopify-Shop-Domain"),
    handler: OrderWebhookHandler = Depends(get_webhook_handler),
) -> Response:
    """
    Receive and process a Shopify order-creation webhook.

    Returns:
        200 with the created WooCommerce order id, 401 on a bad signature,
        500 with an error description on any other failure.
    """
    # Raw body for signature verification; never re-serialized
    body = await request.body()

    if x_shopify_topic or x_shopify_shop_domain:
        logger.info(
            f"Shopify webhook topic={x_shopify_topic or 'unknown'} "
            f"shop={x_shopify_shop_domain or 'unknown'}"
        )

    result = await handler.handle(body, x_shopify_hmac_sha256)

    if result.state == WebhookState.REJECTED:
        return PlainTextResponse("Unauthorized", status_code=result.status_code)

    return JSONResponse(status_code=result.status_code, content=result.to_response())


@router.get(
    "/health",
    summary="Webhook configuration status",
    description="Reports which integration settings are present, never their values.",
)
async def webhook_health(settings: Settings = Depends(get_app_settings)) -> dict[str, Any]:
    """Check webhook endpoint configuration."""
    required = settings.required_status()
    return {
        "status": "healthy" if all(required.values()) else "degraded",
        "settings": {name: "set" if is_set else "missing" for name, is_set in required.items()},
    }
