"""
Checkout API routes.

POST /api/create-checkout turns a source-store cart into a target-store
draft order and returns its invoice URL.
"""

from fastapi import APIRouter
import structlog

from models.checkout import CheckoutRequest, CheckoutResponse
from services.checkout_service import get_checkout_service
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/create-checkout", response_model=CheckoutResponse)
async def create_checkout(data: CheckoutRequest):
    """
    Create a checkout on the target store.

    Lines that cannot be mapped are left out and reported in warnings.

    Raises:
        400: Empty cart, or no line could be mapped
        500: Remote store failure or unexpected error
    """
    cart_items = data.cart_items or []
    logger.info("checkout_requested", lines=len(cart_items))

    try:
        service = get_checkout_service()
        result = await service.create_checkout(cart_items)

        logger.info(
            "checkout_created",
            items=result.items_processed,
            warnings=len(result.warnings or [])
        )

        return CheckoutResponse(
            checkout_url=result.checkout_url,
            items_processed=result.items_processed,
            warnings=result.warnings
        )

    except Exception as e:
        return handle_error(e)
