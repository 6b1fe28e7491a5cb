"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import json
import pytest
from unittest.mock import patch
from typing import Any, Optional

from config.settings import Settings
from exceptions import RemoteApiError
from models.catalog import Product, ShopInfo, StoreCredential, Variant
from models.checkout import LineItem
from services.sku_cache_service import SkuResolutionCache


# ===================
# FAKE CATALOG CLIENT
# ===================

class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeCatalogClient:
    """
    In-memory stand-in for CatalogClient.

    Catalogs are keyed by store name ("source" / "target"). Every call is
    recorded in self.calls as (operation, store_name, argument).
    """

    def __init__(self):
        self.products: dict[str, list[dict]] = {"source": [], "target": []}
        self.variants: dict[str, dict[Any, dict]] = {"source": {}, "target": {}}
        self.errors: dict[tuple[str, str], Exception] = {}
        self.calls: list[tuple[str, str, Any]] = []
        self.draft_order = {"id": 9001, "invoice_url": "https://target.example/invoices/abc"}

    def set_products(self, store: str, products: list[dict]) -> None:
        """Configure the listing of a store; variants become fetchable by id."""
        self.products[store] = products
        for product in products:
            for variant in product["variants"]:
                self.variants[store][variant["id"]] = variant

    def set_variant(self, store: str, variant: dict) -> None:
        self.variants[store][variant["id"]] = variant

    def fail(self, operation: str, store: str, error: Optional[Exception] = None) -> None:
        """Make an operation fail for a store."""
        self.errors[(operation, store)] = error or RemoteApiError(500, "upstream exploded", store=store)

    def calls_to(self, operation: str, store: Optional[str] = None) -> list:
        return [
            c for c in self.calls
            if c[0] == operation and (store is None or c[1] == store)
        ]

    def _record(self, operation: str, store: StoreCredential, arg: Any = None) -> None:
        self.calls.append((operation, store.name, arg))
        error = self.errors.get((operation, store.name))
        if error is not None:
            raise error

    async def list_products(self, store: StoreCredential, limit: Optional[int] = None) -> list[Product]:
        self._record("list_products", store, limit)
        return [Product.model_validate(p) for p in self.products[store.name][:limit]]

    async def get_variant(self, store: StoreCredential, variant_id: Any) -> Variant:
        self._record("get_variant", store, variant_id)
        variant = self.variants[store.name].get(variant_id)
        if variant is None:
            raise RemoteApiError(404, '{"errors":"Not Found"}', store=store.name)
        return Variant.model_validate(variant)

    async def create_draft_order(
        self,
        store: StoreCredential,
        line_items: list[LineItem],
        note: Optional[str] = None
    ) -> dict:
        self._record("create_draft_order", store, [item.model_dump() for item in line_items])
        if not self.draft_order.get("invoice_url"):
            raise RemoteApiError(201, json.dumps({"draft_order": self.draft_order}), store=store.name)
        return dict(self.draft_order)

    async def get_shop(self, store: StoreCredential) -> ShopInfo:
        self._record("get_shop", store)
        return ShopInfo(name=f"{store.name.title()} Shop", domain=store.store_domain)

    async def close(self) -> None:
        pass


# ===================
# FIXTURES
# ===================

@pytest.fixture
def test_settings() -> Settings:
    """Settings with both stores configured and no .env involved."""
    return Settings(
        _env_file=None,
        source_store_domain="source-shop.myshopify.com",
        source_store_token="shpat_source",
        target_store_domain="target-shop.myshopify.com",
        target_store_token="shpat_target",
        environment="development",
    )


@pytest.fixture
def unconfigured_settings() -> Settings:
    """Settings with no store credentials."""
    return Settings(_env_file=None)


@pytest.fixture
def fake_client() -> FakeCatalogClient:
    """
    Create a fake catalog client.

    Usage:
        def test_something(fake_client):
            fake_client.set_products("target", [ProductFactory.create(skus=["A"])])
    """
    return FakeCatalogClient()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sku_cache(clock) -> SkuResolutionCache:
    """Cache with a 1 hour TTL driven by the fake clock."""
    return SkuResolutionCache(ttl_seconds=3600, clock=clock)


@pytest.fixture
def resolver(fake_client, sku_cache, test_settings):
    from services.resolver_service import CrossStoreResolver
    return CrossStoreResolver(client=fake_client, cache=sku_cache, settings=test_settings)


@pytest.fixture
def checkout_service(resolver, fake_client, test_settings):
    from services.checkout_service import CheckoutTranslator
    return CheckoutTranslator(resolver=resolver, client=fake_client, settings=test_settings)


@pytest.fixture
def reconciliation_service(fake_client, test_settings):
    from services.reconciliation_service import CatalogReconciliationService
    return CatalogReconciliationService(client=fake_client, settings=test_settings)


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client(checkout_service, reconciliation_service, fake_client, sku_cache, test_settings):
    """
    Create FastAPI test client wired to the fake catalog client.

    Usage:
        def test_endpoint(test_client, fake_client):
            fake_client.set_products("target", [...])
            response = test_client.post("/api/create-checkout", json={...})
    """
    from fastapi.testclient import TestClient
    from main import app
    from services.diagnostic_service import DiagnosticService

    diagnostics = DiagnosticService(client=fake_client, cache=sku_cache, settings=test_settings)

    with patch("routes.checkout.get_checkout_service", return_value=checkout_service):
        with patch("routes.products.get_reconciliation_service", return_value=reconciliation_service):
            with patch("routes.diagnostics.get_diagnostic_service", return_value=diagnostics):
                yield TestClient(app)
