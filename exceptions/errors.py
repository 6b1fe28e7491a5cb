"""
Custom exception classes for the application.

Every error carries a code, a human-readable message and the HTTP status
the routes answer with. Remote failures keep the upstream status and body
in details for diagnosis.
"""

from typing import Optional, Any
from datetime import datetime


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "EMPTY_CART")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.utcnow().isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        payload = {
            "success": False,
            "error": self.message,
            "code": self.code,
            "timestamp": self.timestamp
        }
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(AppError):
    """Request cannot be served as given (400)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=400,
            details=details
        )


class ExternalServiceError(AppError):
    """External service failure (503)."""

    def __init__(
        self,
        service: str,
        message: str,
        code: Optional[str] = None,
        status_code: int = 503,
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code or f"{service.upper()}_ERROR",
            message=message,
            status_code=status_code,
            details={"service": service, **(details or {})}
        )


# ===================
# REMOTE CATALOG ERRORS
# ===================

class RemoteApiError(ExternalServiceError):
    """
    Remote catalog API call failed.

    status is None when the request never got a response (transport error).
    body is the raw upstream response text, never parsed.
    """

    def __init__(
        self,
        status: Optional[int],
        body: str,
        store: Optional[str] = None,
        path: Optional[str] = None
    ):
        self.status = status
        self.body = body
        if status is None:
            message = f"Remote API transport error: {body}"
        else:
            message = f"Remote API error: {status} - {body}"
        super().__init__(
            service="shopify",
            code="REMOTE_API_ERROR",
            message=message,
            status_code=500,
            details={
                "upstream_status": status,
                "upstream_body": body,
                "store": store,
                "path": path
            }
        )


class StoreNotConfiguredError(ExternalServiceError):
    """Store domain or access token missing from settings."""

    def __init__(self, store: str):
        super().__init__(
            service="shopify",
            code="STORE_NOT_CONFIGURED",
            message=f"Store '{store}' is not configured",
            status_code=500,
            details={"store": store}
        )


# ===================
# RESOLUTION ERRORS
# ===================

class MissingSkuError(ValidationError):
    """Source variant has no SKU, so it cannot be matched."""

    def __init__(self, variant_id: Any):
        self.variant_id = variant_id
        super().__init__(
            code="MISSING_SKU",
            message=f"Variant {variant_id} has no SKU defined",
            details={"variant_id": variant_id}
        )


# ===================
# CHECKOUT ERRORS
# ===================

class EmptyCartError(ValidationError):
    """Checkout requested with no cart lines."""

    def __init__(self):
        super().__init__(
            code="EMPTY_CART",
            message="Cart is empty"
        )


class NoItemsMappedError(ValidationError):
    """No cart line could be resolved in the target store."""

    def __init__(self, warnings: list[str]):
        self.warnings = list(warnings)
        super().__init__(
            code="NO_ITEMS_MAPPED",
            message="No products found in target store",
            details={"warnings": self.warnings}
        )
