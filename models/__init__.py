"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    ApiSchema,
    CatalogSchema
)
from models.catalog import (
    StoreCredential,
    Variant,
    Product,
    ResolvedPair,
    CacheEntry,
    ShopInfo
)
from models.checkout import (
    CartLine,
    CheckoutRequest,
    LineItem,
    LineTranslation,
    CheckoutResult,
    CheckoutResponse
)
from models.sync import (
    MappedVariant,
    MappingEntry,
    UnmappedItem,
    ReconciliationResult,
    SyncStats,
    UnmappedLists,
    SyncResponse
)

__all__ = [
    # Base
    "BaseSchema",
    "ApiSchema",
    "CatalogSchema",

    # Catalog
    "StoreCredential",
    "Variant",
    "Product",
    "ResolvedPair",
    "CacheEntry",
    "ShopInfo",

    # Checkout
    "CartLine",
    "CheckoutRequest",
    "LineItem",
    "LineTranslation",
    "CheckoutResult",
    "CheckoutResponse",

    # Sync
    "MappedVariant",
    "MappingEntry",
    "UnmappedItem",
    "ReconciliationResult",
    "SyncStats",
    "UnmappedLists",
    "SyncResponse",
]
