"""
Product sync API routes.

GET /api/products/sync reconciles both catalogs by SKU.
"""

from fastapi import APIRouter
import structlog

from models.sync import SyncResponse
from services.reconciliation_service import get_reconciliation_service
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/sync", response_model=SyncResponse)
async def sync_products():
    """
    Map source variants to target variants by SKU.

    Returns the mapping plus SKUs found in only one store. Only the first
    catalog page of each store is considered.
    """
    try:
        service = get_reconciliation_service()
        result = await service.reconcile()
        return SyncResponse.from_result(result)

    except Exception as e:
        return handle_error(e)
