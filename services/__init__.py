"""
Business logic services.

Each service handles one domain area.
"""

from services.sku_cache_service import SkuResolutionCache, get_sku_cache
from services.resolver_service import CrossStoreResolver, get_resolver
from services.reconciliation_service import (
    CatalogReconciliationService,
    get_reconciliation_service,
    reconcile_catalogs,
)
from services.checkout_service import CheckoutTranslator, get_checkout_service
from services.diagnostic_service import DiagnosticService, get_diagnostic_service

__all__ = [
    "SkuResolutionCache",
    "get_sku_cache",
    "CrossStoreResolver",
    "get_resolver",
    "CatalogReconciliationService",
    "get_reconciliation_service",
    "reconcile_catalogs",
    "CheckoutTranslator",
    "get_checkout_service",
    "DiagnosticService",
    "get_diagnostic_service",
]
