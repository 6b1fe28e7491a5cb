"""
Store connectivity diagnostics.

Probes both stores with shop.json so operators can check credentials
before sending real traffic.
"""

from typing import Optional
import structlog

from config import settings as app_settings, Settings
from exceptions import StoreNotConfiguredError
from integrations.shopify import CatalogClient, get_catalog_client
from services.sku_cache_service import SkuResolutionCache, get_sku_cache

logger = structlog.get_logger(__name__)

STATUS_CONNECTED = "connected"
STATUS_ERROR = "error connecting"
STATUS_NOT_CONFIGURED = "not configured"


class DiagnosticService:
    """Connectivity checks for the source and target stores."""

    def __init__(
        self,
        client: Optional[CatalogClient] = None,
        cache: Optional[SkuResolutionCache] = None,
        settings: Optional[Settings] = None
    ):
        self.client = client or get_catalog_client()
        self.cache = cache or get_sku_cache()
        self.settings = settings or app_settings

    def configuration_status(self) -> dict:
        """Per-store status used when a probe fails."""
        return {
            "source": STATUS_ERROR if self.settings.source_store else STATUS_NOT_CONFIGURED,
            "target": STATUS_ERROR if self.settings.target_store else STATUS_NOT_CONFIGURED,
        }

    async def probe_stores(self) -> dict:
        """
        Fetch shop.json from both stores.

        Returns:
            dict with name/domain of each store and the cache size

        Raises:
            StoreNotConfiguredError: If a store is missing from settings
            RemoteApiError: If a probe fails
        """
        stores = {}
        for role, store in (
            ("source", self.settings.source_store),
            ("target", self.settings.target_store),
        ):
            if store is None:
                raise StoreNotConfiguredError(role)

            shop = await self.client.get_shop(store)
            logger.info("store_probe_ok", store=role, shop=shop.name)
            stores[role] = {
                "status": STATUS_CONNECTED,
                "shop": shop.name,
                "domain": shop.domain,
            }

        return {
            "stores": stores,
            "cache": {"entries": self.cache.size},
        }


# Singleton instance for convenience
_diagnostic_service: Optional[DiagnosticService] = None


def get_diagnostic_service() -> DiagnosticService:
    """Get or create DiagnosticService instance."""
    global _diagnostic_service
    if _diagnostic_service is None:
        _diagnostic_service = DiagnosticService()
    return _diagnostic_service
