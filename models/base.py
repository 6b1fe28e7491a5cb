"""
Base schemas for all models.

CatalogSchema mirrors remote store payloads (snake_case, unknown fields
ignored). ApiSchema is what our own endpoints speak (camelCase on the wire).
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """
    Base for request/response schemas.

    Features:
        - Auto-trim whitespace from strings
        - Validate on attribute assignment
        - Allow ORM objects (from_attributes)
    """
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True
    )


class ApiSchema(BaseSchema):
    """
    Schema exposed on our HTTP surface, camelCase aliases on the wire.

    SKUs pass through untouched, so no whitespace stripping here.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=False
    )


class CatalogSchema(BaseModel):
    """
    Schema for objects read verbatim from a store catalog.

    Strings are NOT stripped: SKU matching is exact.
    """
    model_config = ConfigDict(
        extra="ignore",
        from_attributes=True
    )
