"""
Cross-store resolver.

Maps a source identifier (SKU or source-store variant id) to the matching
(product, variant) in the target store. SKU resolution goes through the
SKU cache; on a miss it scans the first page of the target catalog.
"""

from typing import Any, Optional
import structlog

from config import settings as app_settings, Settings
from exceptions import MissingSkuError, StoreNotConfiguredError
from integrations.shopify import CatalogClient, get_catalog_client
from models.catalog import ResolvedPair, StoreCredential
from services.sku_cache_service import SkuResolutionCache, get_sku_cache

logger = structlog.get_logger(__name__)


class CrossStoreResolver:
    """
    Resolves source identifiers to target-store pairs.

    Collaborators are injected so tests can swap in fakes.
    """

    def __init__(
        self,
        client: Optional[CatalogClient] = None,
        cache: Optional[SkuResolutionCache] = None,
        settings: Optional[Settings] = None
    ):
        self.client = client or get_catalog_client()
        self.cache = cache or get_sku_cache()
        self.settings = settings or app_settings

    @property
    def source_store(self) -> StoreCredential:
        store = self.settings.source_store
        if store is None:
            raise StoreNotConfiguredError("source")
        return store

    @property
    def target_store(self) -> StoreCredential:
        store = self.settings.target_store
        if store is None:
            raise StoreNotConfiguredError("target")
        return store

    async def resolve_by_sku(
        self,
        sku: Optional[str],
        store: Optional[StoreCredential] = None
    ) -> Optional[ResolvedPair]:
        """
        Find the variant carrying this SKU in a store (target by default).

        Args:
            sku: Exact, case-sensitive SKU
            store: Store to search; defaults to the target store

        Returns:
            ResolvedPair, or None if no variant on the first catalog page matches

        Raises:
            RemoteApiError: If the catalog listing fails
        """
        if not sku:
            return None

        store = store or self.target_store

        cached = self.cache.lookup(sku, store=store.name)
        if cached is not None:
            logger.info("sku_cache_hit", sku=sku, store=store.name)
            return cached

        logger.info("resolving_sku", sku=sku, store=store.name)

        products = await self.client.list_products(
            store,
            limit=self.settings.catalog_page_limit
        )

        for product in products:
            variant = product.find_variant_by_sku(sku)
            if variant is not None:
                pair = ResolvedPair(product=product, variant=variant)
                self.cache.store(sku, pair, store=store.name)
                logger.info(
                    "sku_resolved",
                    sku=sku,
                    store=store.name,
                    product_id=product.id,
                    variant_id=variant.id
                )
                return pair

        logger.warning("sku_not_found", sku=sku, store=store.name)
        return None

    async def resolve_by_source_variant(self, source_variant_id: Any) -> Optional[ResolvedPair]:
        """
        Resolve a source-store variant id to its target-store pair.

        Costs one extra remote call (the variant lookup) over resolve_by_sku.

        Raises:
            MissingSkuError: If the source variant has no SKU
            RemoteApiError: If either remote call fails
        """
        logger.info("resolving_source_variant", variant_id=source_variant_id)

        variant = await self.client.get_variant(self.source_store, source_variant_id)
        if not variant.sku:
            logger.warning("source_variant_missing_sku", variant_id=source_variant_id)
            raise MissingSkuError(source_variant_id)

        return await self.resolve_by_sku(variant.sku, store=self.target_store)


# Singleton instance for convenience
_resolver: Optional[CrossStoreResolver] = None


def get_resolver() -> CrossStoreResolver:
    """Get or create CrossStoreResolver instance."""
    global _resolver
    if _resolver is None:
        _resolver = CrossStoreResolver()
    return _resolver
