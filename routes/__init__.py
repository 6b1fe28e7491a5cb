"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.checkout import router as checkout_router
from routes.products import router as products_router
from routes.diagnostics import router as diagnostics_router

__all__ = [
    "checkout_router",
    "products_router",
    "diagnostics_router",
]
