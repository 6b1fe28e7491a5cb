"""
Unit tests for SkuResolutionCache.

Run: pytest tests/unit/test_sku_cache_service.py -v
"""

import asyncio
import threading

import pytest

from models.catalog import CacheEntry, ResolvedPair
from services.sku_cache_service import SkuResolutionCache, cache_key
from tests.factories import ProductFactory


def make_pair(sku: str = "ABC", title: str = "Shirt") -> ResolvedPair:
    product = ProductFactory.create_model(title=title, skus=[sku])
    return ResolvedPair(product=product, variant=product.variants[0])


class TestSkuCacheLookup:
    """Tests for lookup() and store()"""

    def test_lookup_missing_returns_none(self, sku_cache):
        """Should return None when nothing is cached."""
        assert sku_cache.lookup("ABC") is None

    def test_store_then_lookup_returns_pair(self, sku_cache):
        """Should return the stored pair within the TTL."""
        pair = make_pair("ABC")
        sku_cache.store("ABC", pair)

        cached = sku_cache.lookup("ABC")

        assert cached is not None
        assert cached.variant.id == pair.variant.id
        assert sku_cache.size == 1

    def test_lookup_is_copy_out(self, sku_cache):
        """Mutating a looked-up pair should not change the cache."""
        sku_cache.store("ABC", make_pair("ABC", title="Original"))

        first = sku_cache.lookup("ABC")
        first.product.title = "Mutated"

        assert sku_cache.lookup("ABC").product.title == "Original"

    def test_store_is_copy_in(self, sku_cache):
        """Mutating the stored pair afterwards should not change the cache."""
        pair = make_pair("ABC", title="Original")
        sku_cache.store("ABC", pair)

        pair.product.title = "Mutated"

        assert sku_cache.lookup("ABC").product.title == "Original"

    def test_store_overwrites_wholesale(self, sku_cache):
        """Should replace the previous entry (last write wins)."""
        sku_cache.store("ABC", make_pair("ABC", title="First"))
        sku_cache.store("ABC", make_pair("ABC", title="Second"))

        assert sku_cache.lookup("ABC").product.title == "Second"
        assert sku_cache.size == 1

    def test_empty_sku_is_never_cached(self, sku_cache):
        """Should ignore pairs whose variant has no SKU."""
        pair = make_pair("")
        sku_cache.store("", pair)

        assert sku_cache.size == 0

    def test_entries_are_scoped_per_store(self, sku_cache):
        """Same SKU in different stores should not collide."""
        sku_cache.store("ABC", make_pair("ABC", title="Target"), store="target")

        assert sku_cache.lookup("ABC", store="source") is None
        assert sku_cache.lookup("ABC", store="target").product.title == "Target"

    def test_cache_key_format(self):
        assert cache_key("ABC-1") == "sku:ABC-1"


class TestSkuCacheExpiry:
    """Tests for TTL handling"""

    def test_entry_expires_exactly_at_ttl(self, sku_cache, clock):
        """Age equal to TTL should count as expired."""
        sku_cache.store("ABC", make_pair("ABC"))

        clock.advance(3599)
        assert sku_cache.lookup("ABC") is not None

        clock.advance(1)
        assert sku_cache.lookup("ABC") is None

    def test_expired_lookup_does_not_require_sweep(self, sku_cache, clock):
        """Expired entries are absent even though they are still stored."""
        sku_cache.store("ABC", make_pair("ABC"))
        clock.advance(7200)

        assert sku_cache.lookup("ABC") is None
        assert sku_cache.size == 1

    def test_purge_expired_removes_only_old_entries(self, sku_cache, clock):
        """Should remove entries whose age reached the TTL."""
        sku_cache.store("OLD", make_pair("OLD"))
        clock.advance(3000)
        sku_cache.store("NEW", make_pair("NEW"))
        clock.advance(600)

        removed = sku_cache.purge_expired()

        assert removed == 1
        assert sku_cache.size == 1
        assert sku_cache.lookup("NEW") is not None

    def test_purge_with_explicit_now(self, sku_cache, clock):
        sku_cache.store("ABC", make_pair("ABC"))

        assert sku_cache.purge_expired(now=clock.now + 3600) == 1
        assert sku_cache.size == 0

    def test_clear(self, sku_cache):
        sku_cache.store("ABC", make_pair("ABC"))
        sku_cache.clear()
        assert sku_cache.size == 0

    def test_zero_ttl_is_not_replaced_by_default(self, clock):
        """An explicit TTL of 0 expires every entry at once."""
        cache = SkuResolutionCache(ttl_seconds=0, clock=clock)
        cache.store("ABC", make_pair("ABC"))

        assert cache.ttl_seconds == 0
        assert cache.lookup("ABC") is None

    def test_entry_keeps_only_key_value_and_store_time(self, sku_cache, clock):
        sku_cache.store("ABC", make_pair("ABC"))

        entry = next(iter(sku_cache._entries.values()))

        assert set(CacheEntry.model_fields) == {"key", "value", "created_at"}
        assert entry.created_at == clock.now


class TestSkuCacheLocking:
    """Tests for lock discipline"""

    def test_size_waits_for_the_lock(self, sku_cache):
        sku_cache.store("ABC", make_pair("ABC"))
        seen = []
        reader = threading.Thread(target=lambda: seen.append(sku_cache.size))

        with sku_cache._lock:
            reader.start()
            reader.join(timeout=0.1)
            assert seen == []

        reader.join(timeout=1)
        assert seen == [1]

    def test_purge_reports_remaining_without_deadlock(self, sku_cache, clock):
        sku_cache.store("OLD", make_pair("OLD"))
        clock.advance(3000)
        sku_cache.store("NEW", make_pair("NEW"))
        clock.advance(600)
        worker = threading.Thread(target=sku_cache.purge_expired)

        worker.start()
        worker.join(timeout=1)

        assert not worker.is_alive()
        assert sku_cache.size == 1


class TestSkuCacheSweeper:
    """Tests for the background sweep"""

    @pytest.mark.asyncio
    async def test_sweeper_purges_periodically(self):
        """Should purge on each interval while running."""
        now = [0.0]
        cache = SkuResolutionCache(ttl_seconds=0.05, clock=lambda: now[0])
        cache.store("ABC", make_pair("ABC"))
        now[0] = 1.0

        cache.start_sweeper()
        await asyncio.sleep(0.2)
        await cache.stop_sweeper()

        assert cache.size == 0

    @pytest.mark.asyncio
    async def test_stop_without_start_is_noop(self):
        cache = SkuResolutionCache(ttl_seconds=10)
        await cache.stop_sweeper()

    @pytest.mark.asyncio
    async def test_start_twice_keeps_one_task(self):
        cache = SkuResolutionCache(ttl_seconds=10)
        cache.start_sweeper()
        task = cache._sweeper
        cache.start_sweeper()

        assert cache._sweeper is task
        await cache.stop_sweeper()
