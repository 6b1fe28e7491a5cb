"""
Catalog reconciliation.

Two-way join of the source and target catalogs by SKU. Uses the bulk
listing directly; the SKU cache is not consulted or filled.
"""

import asyncio
from typing import Optional
import structlog

from config import settings as app_settings, Settings
from exceptions import StoreNotConfiguredError
from integrations.shopify import CatalogClient, get_catalog_client
from models.catalog import Product, Variant
from models.sync import (
    MappedVariant,
    MappingEntry,
    ReconciliationResult,
    UnmappedItem
)

logger = structlog.get_logger(__name__)


def _mapped_side(product: Product, variant: Variant) -> MappedVariant:
    return MappedVariant(
        product_id=product.id,
        product_title=product.title,
        variant_id=variant.id,
        variant_title=variant.title
    )


def _unmapped(product: Product, variant: Variant) -> UnmappedItem:
    return UnmappedItem(sku=variant.sku, product=product.title, variant=variant.title)


def find_first_by_sku(products: list[Product], sku: str) -> Optional[tuple[Product, Variant]]:
    """
    First (product, variant) carrying sku, in listing order.

    When several target variants share a SKU only the first one is ever
    linked. First-listed-wins is observed behavior, not a documented rule
    of either store.
    """
    for product in products:
        variant = product.find_variant_by_sku(sku)
        if variant is not None:
            return product, variant
    return None


def reconcile_catalogs(
    source_products: list[Product],
    target_products: list[Product]
) -> ReconciliationResult:
    """
    Join two product listings by exact SKU.

    Args:
        source_products: Source store listing, in listing order
        target_products: Target store listing, in listing order

    Returns:
        ReconciliationResult with mapping and both unmapped lists
    """
    result = ReconciliationResult()
    mapped_skus: set[str] = set()

    for product in source_products:
        for variant in product.variants:
            if not variant.has_sku:
                continue

            match = find_first_by_sku(target_products, variant.sku)
            if match is None:
                result.unmapped_source.append(_unmapped(product, variant))
                continue

            target_product, target_variant = match
            result.mapping.append(MappingEntry(
                sku=variant.sku,
                source=_mapped_side(product, variant),
                target=_mapped_side(target_product, target_variant)
            ))
            mapped_skus.add(variant.sku)

    for product in target_products:
        for variant in product.variants:
            if variant.has_sku and variant.sku not in mapped_skus:
                result.unmapped_target.append(_unmapped(product, variant))

    return result


class CatalogReconciliationService:
    """Fetches both catalogs and reconciles them."""

    def __init__(
        self,
        client: Optional[CatalogClient] = None,
        settings: Optional[Settings] = None
    ):
        self.client = client or get_catalog_client()
        self.settings = settings or app_settings

    async def reconcile(self) -> ReconciliationResult:
        """
        Fetch both catalogs concurrently and join them.

        Both listings are awaited before anything is scanned; if either
        fails the whole operation fails and no partial mapping is returned.

        Raises:
            RemoteApiError: If either listing fails
            StoreNotConfiguredError: If either store is missing
        """
        source_store = self.settings.source_store
        target_store = self.settings.target_store
        if source_store is None:
            raise StoreNotConfiguredError("source")
        if target_store is None:
            raise StoreNotConfiguredError("target")

        logger.info("reconciling_catalogs")

        limit = self.settings.catalog_page_limit
        source_listing, target_listing = await asyncio.gather(
            self.client.list_products(source_store, limit=limit),
            self.client.list_products(target_store, limit=limit),
            return_exceptions=True
        )

        for listing in (source_listing, target_listing):
            if isinstance(listing, BaseException):
                logger.error(
                    "reconcile_listing_failed",
                    error=str(listing),
                    error_type=type(listing).__name__
                )
                raise listing

        result = reconcile_catalogs(source_listing, target_listing)

        logger.info(
            "catalogs_reconciled",
            mapped=len(result.mapping),
            unmapped_source=len(result.unmapped_source),
            unmapped_target=len(result.unmapped_target)
        )
        return result


# Singleton instance for convenience
_reconciliation_service: Optional[CatalogReconciliationService] = None


def get_reconciliation_service() -> CatalogReconciliationService:
    """Get or create CatalogReconciliationService instance."""
    global _reconciliation_service
    if _reconciliation_service is None:
        _reconciliation_service = CatalogReconciliationService()
    return _reconciliation_service
