"""Configuration management using pydantic-settings."""

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # Shopify webhooks
    shopify_webhook_secret: str = Field(
        default="",
        validation_alias=AliasChoices("SHOPIFY_WEBHOOK_SECRET", "shopify_webhook_secret"),
        description="Shared secret used to sign Shopify webhooks",
    )

    # WooCommerce Integration
    woocommerce_store_url: str = Field(
        default="",
        validation_alias=AliasChoices("WC_URL", "woocommerce_store_url"),
        description="WooCommerce store URL (e.g., https://mystore.com)",
    )
    woocommerce_consumer_key: str = Field(
        default="",
        validation_alias=AliasChoices("WC_CONSUMER_KEY", "woocommerce_consumer_key"),
        description="WooCommerce REST API consumer key",
    )
    woocommerce_consumer_secret: str = Field(
        default="",
        validation_alias=AliasChoices("WC_CONSUMER_SECRET", "woocommerce_consumer_secret"),
        description="WooCommerce REST API consumer secret",
    )
    woocommerce_timeout_seconds: float = Field(
        default=30.0,
        validation_alias=AliasChoices("WC_TIMEOUT_SECONDS", "woocommerce_timeout_seconds"),
        description="Timeout for WooCommerce REST calls in seconds",
    )
    sku_lookup_concurrency: int = Field(
        default=10,
        ge=1,
        description="Maximum concurrent product lookups per order",
    )

    # Server
    host: str = Field(
        default="0.0.0.0",
        description="Interface the HTTP server binds to",
    )
    port: int = Field(
        default=3000,
        description="Port the HTTP server listens on",
    )
    api_title: str = Field(
        default="Shopify to WooCommerce Order Bridge",
        description="API title",
    )
    api_version: str = Field(
        default="0.1.0",
        description="API version",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_json: bool = Field(
        default=True,
        description="Enable JSON structured logging",
    )

    def required_status(self) -> dict[str, bool]:
        """Map each required environment variable to whether it is set."""
        return {
            "WC_URL": bool(self.woocommerce_store_url),
            "WC_CONSUMER_KEY": bool(self.woocommerce_consumer_key),
            "WC_CONSUMER_SECRET": bool(self.woocommerce_consumer_secret),
            "SHOPIFY_WEBHOOK_SECRET": bool(self.shopify_webhook_secret),
        }

    def missing_required(self) -> list[str]:
        """Names of required environment variables that are not set."""
        return [name for name, is_set in self.required_status().items() if not is_set]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
