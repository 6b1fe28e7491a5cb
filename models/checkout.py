"""
Checkout schemas: cart lines in, draft-order line items out.
"""

from typing import Optional

from pydantic import BaseModel, Field

from models.base import ApiSchema


class CartLine(ApiSchema):
    """
    One cart line expressed in source-store identifiers.

    At least one of variant_id/sku is needed for the line to resolve;
    a line with neither is reported as a warning, not rejected.
    """

    variant_id: Optional[int] = Field(
        None,
        description="Source-store variant id"
    )
    sku: Optional[str] = Field(
        None,
        description="SKU shared by both stores"
    )
    quantity: int = Field(
        ...,
        ge=1,
        description="Units to order"
    )


class CheckoutRequest(ApiSchema):
    """Body of POST /api/create-checkout."""

    cart_items: Optional[list[CartLine]] = Field(
        None,
        description="Cart lines; null or missing counts as an empty cart"
    )


class LineItem(BaseModel):
    """Draft-order line item in target-store identifiers."""

    variant_id: int
    quantity: int


class LineTranslation(BaseModel):
    """Result of translating a cart into target line items."""

    line_items: list[LineItem] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class CheckoutResult(BaseModel):
    """Outcome of a successful checkout creation."""

    checkout_url: Optional[str]
    items_processed: int
    warnings: Optional[list[str]] = None
    draft_order_id: Optional[int] = None


class CheckoutResponse(ApiSchema):
    """Response of POST /api/create-checkout."""

    success: bool = True
    checkout_url: Optional[str] = None
    items_processed: int = 0
    warnings: Optional[list[str]] = None
