"""
Time-bounded memoization of SKU resolutions.

Entries live in memory, per process, keyed by store and "sku:<SKU>".
A lookup never returns an entry whose age reached the TTL, whether or not
the background sweep has removed it yet.
"""

import asyncio
import threading
import time
from typing import Callable, Optional

import structlog

from config import settings
from models.catalog import CacheEntry, ResolvedPair

logger = structlog.get_logger(__name__)


def cache_key(sku: str) -> str:
    return f"sku:{sku}"


class SkuResolutionCache:
    """
    SKU -> (product, variant) cache with TTL expiry.

    Values are deep-copied on store and on lookup so callers can never
    mutate what the cache holds.
    """

    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        self.ttl_seconds = settings.cache_ttl_seconds if ttl_seconds is None else ttl_seconds
        self._clock = clock
        self._entries: dict[tuple[str, str], CacheEntry] = {}
        self._lock = threading.Lock()
        self._sweeper: Optional[asyncio.Task] = None

    def _is_expired(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.created_at >= self.ttl_seconds

    def lookup(self, sku: str, store: str = "target") -> Optional[ResolvedPair]:
        """
        Get the cached pair for a SKU.

        Returns None if absent or expired. Expired entries are left for
        the sweep.
        """
        key = cache_key(sku)
        with self._lock:
            entry = self._entries.get((store, key))
        if entry is None:
            return None
        if self._is_expired(entry, self._clock()):
            logger.debug("sku_cache_expired", sku=sku, store=store)
            return None
        return entry.value.model_copy(deep=True)

    def store(self, sku: str, pair: ResolvedPair, store: str = "target") -> None:
        """Store a resolution, replacing any previous entry for the SKU."""
        if not sku or not pair.variant.sku:
            return
        key = cache_key(sku)
        entry = CacheEntry(
            key=key,
            value=pair.model_copy(deep=True),
            created_at=self._clock()
        )
        with self._lock:
            self._entries[(store, key)] = entry
        logger.debug("sku_cache_stored", sku=sku, store=store)

    def purge_expired(self, now: Optional[float] = None) -> int:
        """Remove every entry whose age reached the TTL. Returns count removed."""
        now = self._clock() if now is None else now
        with self._lock:
            expired = [k for k, e in self._entries.items() if self._is_expired(e, now)]
            for k in expired:
                del self._entries[k]
            remaining = len(self._entries)
        if expired:
            logger.info("sku_cache_purged", removed=len(expired), remaining=remaining)
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    @property
    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    # ===================
    # BACKGROUND SWEEP
    # ===================

    async def _sweep_forever(self) -> None:
        while True:
            await asyncio.sleep(self.ttl_seconds)
            self.purge_expired()

    def start_sweeper(self) -> None:
        """Start the periodic sweep on the running event loop."""
        if self._sweeper is not None and not self._sweeper.done():
            return
        self._sweeper = asyncio.get_running_loop().create_task(self._sweep_forever())
        logger.info("sku_cache_sweeper_started", interval_seconds=self.ttl_seconds)

    async def stop_sweeper(self) -> None:
        if self._sweeper is None:
            return
        self._sweeper.cancel()
        try:
            await self._sweeper
        except asyncio.CancelledError:
            pass
        self._sweeper = None
        logger.info("sku_cache_sweeper_stopped")


# Singleton instance for convenience
_sku_cache: Optional[SkuResolutionCache] = None


def get_sku_cache() -> SkuResolutionCache:
    """Get or create the process-wide SkuResolutionCache."""
    global _sku_cache
    if _sku_cache is None:
        _sku_cache = SkuResolutionCache()
    return _sku_cache
