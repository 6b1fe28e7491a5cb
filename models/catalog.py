"""
Catalog schemas: stores, products, variants and resolved pairs.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from models.base import CatalogSchema


class StoreCredential(BaseModel):
    """Immutable credential for one store, built once from settings."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Logical role: source or target")
    store_domain: str = Field(..., description="e.g. my-store.myshopify.com")
    access_token: str = Field(..., repr=False)


class Variant(CatalogSchema):
    """A purchasable option of a product."""

    id: int
    sku: Optional[str] = None
    title: Optional[str] = None
    product_id: Optional[int] = None

    @property
    def has_sku(self) -> bool:
        """Variants without a SKU never take part in SKU matching."""
        return bool(self.sku)


class Product(CatalogSchema):
    """Product as listed by a store catalog."""

    id: int
    title: Optional[str] = None
    variants: list[Variant] = Field(default_factory=list)

    def find_variant_by_sku(self, sku: str) -> Optional[Variant]:
        """First variant whose SKU equals sku exactly, in listing order."""
        if not sku:
            return None
        for variant in self.variants:
            if variant.sku == sku:
                return variant
        return None


class ResolvedPair(CatalogSchema):
    """A (product, variant) found in one store."""

    product: Product
    variant: Variant


class CacheEntry(BaseModel):
    """Cached SKU resolution. Replaced wholesale, never merged."""

    key: str
    value: ResolvedPair
    created_at: float = Field(..., description="Clock reading at store time")


class ShopInfo(CatalogSchema):
    """Subset of shop.json used by the connectivity probe."""

    name: Optional[str] = None
    domain: Optional[str] = None
