"""
Shopify Admin API client.

Performs authenticated requests against a store's catalog/order API.
Transport failures and non-2xx responses are normalized into RemoteApiError.
No retries happen here; retry policy belongs to callers.
"""

from typing import Any, Optional
import json

import httpx
import structlog

from config import settings
from exceptions import RemoteApiError, StoreNotConfiguredError
from models.catalog import Product, ShopInfo, StoreCredential, Variant
from models.checkout import LineItem

logger = structlog.get_logger(__name__)

ACCESS_TOKEN_HEADER = "X-Shopify-Access-Token"


class CatalogClient:
    """
    Remote catalog client shared by every service.

    Holds one httpx.AsyncClient; call close() on shutdown.
    """

    def __init__(
        self,
        api_version: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_version = settings.shopify_api_version if api_version is None else api_version
        self._client = httpx.AsyncClient(
            timeout=settings.http_timeout_seconds if timeout is None else timeout,
            transport=transport
        )

    def build_url(self, store: StoreCredential, path: str) -> str:
        return f"https://{store.store_domain}/admin/api/{self.api_version}/{path.lstrip('/')}"

    async def request(
        self,
        store: Optional[StoreCredential],
        path: str,
        method: str = "GET",
        body: Optional[dict] = None,
        params: Optional[dict] = None
    ) -> Any:
        """
        Send one request to a store and return the decoded JSON.

        Args:
            store: Store credential (None means the store is not configured)
            path: Path below /admin/api/<version>/, e.g. "products.json"
            method: HTTP method
            body: JSON body, sent only for non-GET methods
            params: Query string parameters

        Returns:
            Decoded JSON payload

        Raises:
            StoreNotConfiguredError: If store is None
            RemoteApiError: On transport error, non-2xx status or non-JSON body
        """
        _, data = await self._send(store, path, method, body, params)
        return data

    async def _send(
        self,
        store: Optional[StoreCredential],
        path: str,
        method: str,
        body: Optional[dict],
        params: Optional[dict]
    ) -> tuple[httpx.Response, Any]:
        if store is None:
            raise StoreNotConfiguredError("unknown")

        method = method.upper()
        url = self.build_url(store, path)
        headers = {
            "Content-Type": "application/json",
            ACCESS_TOKEN_HEADER: store.access_token,
        }
        content = None
        if body is not None and method != "GET":
            content = json.dumps(body)

        logger.debug("remote_api_request", store=store.name, method=method, path=path)

        try:
            response = await self._client.request(
                method,
                url,
                headers=headers,
                params=params,
                content=content
            )
        except httpx.HTTPError as e:
            logger.error(
                "remote_api_transport_failed",
                store=store.name,
                path=path,
                error=str(e),
                error_type=type(e).__name__
            )
            raise RemoteApiError(None, str(e), store=store.name, path=path) from e

        if not response.is_success:
            logger.error(
                "remote_api_error",
                store=store.name,
                path=path,
                status=response.status_code
            )
            raise RemoteApiError(
                response.status_code,
                response.text,
                store=store.name,
                path=path
            )

        try:
            return response, response.json()
        except ValueError as e:
            logger.error("remote_api_invalid_json", store=store.name, path=path)
            raise RemoteApiError(
                response.status_code,
                response.text,
                store=store.name,
                path=path
            ) from e

    # ===================
    # CATALOG OPERATIONS
    # ===================

    async def list_products(
        self,
        store: Optional[StoreCredential],
        limit: Optional[int] = None
    ) -> list[Product]:
        """
        List the first page of a store's products.

        Only one page is fetched; catalogs larger than the page limit are
        truncated (known limitation, no pagination).
        """
        limit = settings.catalog_page_limit if limit is None else limit
        data = await self.request(store, "products.json", params={"limit": limit})
        products = [Product.model_validate(p) for p in data.get("products", [])]

        logger.info("products_listed", store=store.name, count=len(products))
        if len(products) >= limit:
            logger.warning(
                "product_listing_truncated",
                store=store.name,
                limit=limit
            )
        return products

    async def get_variant(
        self,
        store: Optional[StoreCredential],
        variant_id: Any
    ) -> Variant:
        """Fetch one variant by id."""
        data = await self.request(store, f"variants/{variant_id}.json")
        return Variant.model_validate(data["variant"])

    async def create_draft_order(
        self,
        store: Optional[StoreCredential],
        line_items: list[LineItem],
        note: Optional[str] = None
    ) -> dict:
        """
        Create a draft order and return the draft_order object.

        The invoice_url of the result is the payable checkout reference.

        Raises:
            RemoteApiError: Also on a 2xx reply without a draft_order or
                without its invoice_url
        """
        payload = {
            "draft_order": {
                "line_items": [item.model_dump() for item in line_items],
                "use_customer_default_address": True,
                "note": settings.draft_order_note if note is None else note,
            }
        }
        path = "draft_orders.json"
        response, data = await self._send(store, path, "POST", payload, None)
        draft_order = data.get("draft_order") if isinstance(data, dict) else None

        if not isinstance(draft_order, dict) or not draft_order.get("invoice_url"):
            logger.error(
                "draft_order_incomplete",
                store=store.name,
                status=response.status_code
            )
            raise RemoteApiError(
                response.status_code,
                response.text,
                store=store.name,
                path=path
            )

        logger.info(
            "draft_order_created",
            store=store.name,
            draft_order_id=draft_order.get("id"),
            line_items=len(line_items)
        )
        return draft_order

    async def get_shop(self, store: Optional[StoreCredential]) -> ShopInfo:
        """Fetch shop.json; used as a connectivity probe."""
        data = await self.request(store, "shop.json")
        return ShopInfo.model_validate(data.get("shop", {}))

    async def close(self) -> None:
        await self._client.aclose()


# Singleton instance for convenience
_catalog_client: Optional[CatalogClient] = None


def get_catalog_client() -> CatalogClient:
    """Get or create the shared CatalogClient."""
    global _catalog_client
    if _catalog_client is None:
        _catalog_client = CatalogClient()
    return _catalog_client


async def close_catalog_client() -> None:
    """Close the shared client, if one was created."""
    global _catalog_client
    if _catalog_client is not None:
        await _catalog_client.close()
        _catalog_client = None
