"""Signature verification for Shopify webhooks."""

import base64
import hashlib
import hmac
import logging

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Shopify-Hmac-Sha256"


class ShopifyWebhookVerifier:
    """
    Verifies the HMAC signature Shopify attaches to every webhook.

    Shopify signs the raw request body with HMAC-SHA256 using the app's
    webhook secret and sends the base64-encoded digest in the
    X-Shopify-Hmac-Sha256 header. Verification must run on the exact bytes
    received; a re-serialized body will not match.
    """

    def __init__(self, webhook_secret: str) -> None:
        """
        Initialize the verifier.

        Args:
            webhook_secret: Shared secret configured in the Shopify admin.
        """
        self.webhook_secret = webhook_secret

    def compute_signature(self, payload: bytes) -> str:
        """Base64-encoded HMAC-SHA256 of ``payload`` under the webhook secret."""
        digest = hmac.new(
            self.webhook_secret.encode("utf-8"),
            payload,
            hashlib.sha256,
        ).digest()
        return base64.b64encode(digest).decode("ascii")

    def verify_signature(self, payload: bytes, signature: str | None) -> bool:
        """
        Verify a webhook signature.

        Args:
            payload: Raw request body bytes.
            signature: Value of the X-Shopify-Hmac-Sha256 header, if any.

        Returns:
            True if the signature matches, False otherwise. Never raises.
        """
        if not signature:
            return False

        if not self.webhook_secret:
            logger.warning("Shopify webhook secret is not configured; rejecting webhook")
            return False

        expected = self.compute_signature(payload).encode("ascii")

        # Constant-time comparison; differing lengths simply compare unequal
        return hmac.compare_digest(expected, signature.encode("utf-8"))
