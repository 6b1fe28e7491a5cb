"""
Checkout translation.

Turns a cart expressed in source-store identifiers into a draft order on
the target store. Lines are resolved one at a time, in input order; a line
that fails becomes a warning and never stops the lines after it.
"""

from typing import Optional
import structlog

from config import settings as app_settings, Settings
from exceptions import AppError, EmptyCartError, NoItemsMappedError
from integrations.shopify import CatalogClient, get_catalog_client
from models.catalog import ResolvedPair
from models.checkout import CartLine, CheckoutResult, LineItem, LineTranslation
from services.resolver_service import CrossStoreResolver, get_resolver

logger = structlog.get_logger(__name__)


class CheckoutTranslator:
    """
    Cart -> target draft order.

    Handles line resolution and the single order-creation call.
    """

    def __init__(
        self,
        resolver: Optional[CrossStoreResolver] = None,
        client: Optional[CatalogClient] = None,
        settings: Optional[Settings] = None
    ):
        self.resolver = resolver or get_resolver()
        self.client = client or get_catalog_client()
        self.settings = settings or app_settings

    # ===================
    # LINE RESOLUTION
    # ===================

    async def _resolve_line(self, line: CartLine) -> Optional[ResolvedPair]:
        """SKU first (one remote call less), variant id as fallback."""
        pair = None
        if line.sku:
            pair = await self.resolver.resolve_by_sku(line.sku)
        if pair is None and line.variant_id is not None:
            pair = await self.resolver.resolve_by_source_variant(line.variant_id)
        return pair

    async def translate(self, cart_lines: list[CartLine]) -> LineTranslation:
        """
        Resolve every cart line against the target store.

        Args:
            cart_lines: Cart lines in source-store identifiers

        Returns:
            LineTranslation with resolved line items and per-line warnings,
            both in input order

        Raises:
            EmptyCartError: If cart_lines is empty
            NoItemsMappedError: If no line resolved
        """
        if not cart_lines:
            raise EmptyCartError()

        total = len(cart_lines)
        logger.info("translating_cart", lines=total)

        result = LineTranslation()

        for index, line in enumerate(cart_lines, start=1):
            logger.info(
                "processing_cart_line",
                line=f"{index}/{total}",
                variant_id=line.variant_id,
                sku=line.sku or "not provided",
                quantity=line.quantity
            )

            try:
                pair = await self._resolve_line(line)
            except AppError as e:
                logger.error("checkout_line_failed", line=index, error=e.message, code=e.code)
                result.warnings.append(f"Line {index}: {e.message}")
                continue
            except Exception as e:
                # Malformed upstream payloads land here; still only this line fails
                logger.error(
                    "checkout_line_failed",
                    line=index,
                    error=str(e),
                    error_type=type(e).__name__
                )
                result.warnings.append(f"Line {index}: {e}")
                continue

            if pair is None:
                warning = (
                    f"Line {index}: product not found in target store "
                    f"(SKU: {line.sku or 'N/A'})"
                )
                logger.warning("checkout_line_unmapped", line=index, sku=line.sku)
                result.warnings.append(warning)
                continue

            result.line_items.append(LineItem(variant_id=pair.variant.id, quantity=line.quantity))
            logger.info(
                "checkout_line_mapped",
                line=index,
                product=pair.product.title,
                target_variant_id=pair.variant.id
            )

        if not result.line_items:
            logger.warning("no_items_mapped", warnings=len(result.warnings))
            raise NoItemsMappedError(result.warnings)

        if result.warnings:
            logger.warning("cart_partially_mapped", unmapped=len(result.warnings))

        return result

    # ===================
    # ORDER CREATION
    # ===================

    async def create_checkout(self, cart_lines: list[CartLine]) -> CheckoutResult:
        """
        Translate the cart and create one draft order on the target store.

        Unresolved lines are left out of the order; the warnings list is the
        only record of them. No order is created when translation fails.

        Raises:
            EmptyCartError: If cart_lines is empty
            NoItemsMappedError: If no line resolved
            RemoteApiError: If the draft order call fails
        """
        translation = await self.translate(cart_lines)

        logger.info("creating_draft_order", items=len(translation.line_items))

        draft_order = await self.client.create_draft_order(
            self.resolver.target_store,
            translation.line_items,
            note=self.settings.draft_order_note
        )

        return CheckoutResult(
            checkout_url=draft_order.get("invoice_url"),
            items_processed=len(translation.line_items),
            warnings=translation.warnings or None,
            draft_order_id=draft_order.get("id")
        )


# Singleton instance for convenience
_checkout_service: Optional[CheckoutTranslator] = None


def get_checkout_service() -> CheckoutTranslator:
    """Get or create CheckoutTranslator instance."""
    global _checkout_service
    if _checkout_service is None:
        _checkout_service = CheckoutTranslator()
    return _checkout_service
