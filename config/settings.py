"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
Store credentials are optional so the service can boot and report
which store is missing from /api/test.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from typing import Optional

from models.catalog import StoreCredential


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # SOURCE STORE
    # ===================
    source_store_domain: Optional[str] = Field(
        None,
        description="Source store domain, e.g. my-source.myshopify.com"
    )
    source_store_token: Optional[str] = Field(
        None,
        description="Admin API access token for the source store"
    )

    # ===================
    # TARGET STORE
    # ===================
    target_store_domain: Optional[str] = Field(
        None,
        description="Target store domain where checkouts are created"
    )
    target_store_token: Optional[str] = Field(
        None,
        description="Admin API access token for the target store"
    )

    # ===================
    # REMOTE CATALOG API
    # ===================
    shopify_api_version: str = Field(
        default="2024-01",
        description="Admin API version segment used in request URLs"
    )
    catalog_page_limit: int = Field(
        default=250,
        ge=1,
        le=250,
        description="Products fetched per listing (first page only)"
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        le=300,
        description="Timeout applied by the HTTP client to each remote call"
    )
    draft_order_note: str = Field(
        default="Order created via source -> target store integration",
        description="Note attached to every draft order"
    )

    # ===================
    # CACHE
    # ===================
    cache_ttl_seconds: int = Field(
        default=3600,
        ge=1,
        le=86400,
        description="SKU resolution cache TTL; also the sweep interval"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API host"
    )
    api_port: int = Field(
        default=3000,
        ge=1000,
        le=65535,
        description="API port"
    )
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def source_store(self) -> Optional[StoreCredential]:
        """Source store credential, or None if not configured."""
        if not self.source_store_domain or not self.source_store_token:
            return None
        return StoreCredential(
            name="source",
            store_domain=self.source_store_domain,
            access_token=self.source_store_token
        )

    @property
    def target_store(self) -> Optional[StoreCredential]:
        """Target store credential, or None if not configured."""
        if not self.target_store_domain or not self.target_store_token:
            return None
        return StoreCredential(
            name="target",
            store_domain=self.target_store_domain,
            access_token=self.target_store_token
        )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
