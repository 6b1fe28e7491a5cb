"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    ValidationError,
    ExternalServiceError,

    # Remote catalog
    RemoteApiError,
    StoreNotConfiguredError,

    # Resolution
    MissingSkuError,

    # Checkout
    EmptyCartError,
    NoItemsMappedError,
)

__all__ = [
    # Base
    "AppError",
    "ValidationError",
    "ExternalServiceError",

    # Remote catalog
    "RemoteApiError",
    "StoreNotConfiguredError",

    # Resolution
    "MissingSkuError",

    # Checkout
    "EmptyCartError",
    "NoItemsMappedError",
]
