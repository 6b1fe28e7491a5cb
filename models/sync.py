"""
Catalog reconciliation schemas.
"""

from typing import Optional

from pydantic import Field

from models.base import ApiSchema


class MappedVariant(ApiSchema):
    """One side of a mapping entry."""

    product_id: int
    product_title: Optional[str] = None
    variant_id: int
    variant_title: Optional[str] = None


class MappingEntry(ApiSchema):
    """A SKU present in both stores."""

    sku: str
    source: MappedVariant
    target: MappedVariant


class UnmappedItem(ApiSchema):
    """A variant with a SKU that has no counterpart in the other store."""

    sku: str
    product: Optional[str] = Field(None, description="Product title")
    variant: Optional[str] = Field(None, description="Variant title")


class ReconciliationResult(ApiSchema):
    """Full two-way join of both catalogs."""

    mapping: list[MappingEntry] = Field(default_factory=list)
    unmapped_source: list[UnmappedItem] = Field(default_factory=list)
    unmapped_target: list[UnmappedItem] = Field(default_factory=list)


class SyncStats(ApiSchema):
    total_mapped: int
    unmapped_source: int
    unmapped_target: int


class UnmappedLists(ApiSchema):
    source: list[UnmappedItem] = Field(default_factory=list)
    target: list[UnmappedItem] = Field(default_factory=list)


class SyncResponse(ApiSchema):
    """Response of GET /api/products/sync."""

    success: bool = True
    stats: SyncStats
    mapping: list[MappingEntry]
    unmapped: UnmappedLists

    @classmethod
    def from_result(cls, result: ReconciliationResult) -> "SyncResponse":
        return cls(
            stats=SyncStats(
                total_mapped=len(result.mapping),
                unmapped_source=len(result.unmapped_source),
                unmapped_target=len(result.unmapped_target)
            ),
            mapping=result.mapping,
            unmapped=UnmappedLists(
                source=result.unmapped_source,
                target=result.unmapped_target
            )
        )
