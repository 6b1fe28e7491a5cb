"""
Diagnostics API routes.

GET /api/test probes both stores.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
import structlog

from exceptions import AppError
from services.diagnostic_service import get_diagnostic_service

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/test")
async def test_connections():
    """
    Check that both stores answer with the configured credentials.

    On failure every store is reported as "not configured" or
    "error connecting".
    """
    service = get_diagnostic_service()

    try:
        report = await service.probe_stores()
    except AppError as e:
        logger.error("store_probe_failed", error=e.message, code=e.code)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": e.message,
                "stores": service.configuration_status()
            }
        )

    return {
        "success": True,
        "message": "Server is up and both stores answered",
        **report
    }
