"""Persistent TTL-bounded cache of normalized scan results."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from scamvigil.constants.config import DEFAULT_CACHE_TTL_HOURS
from scamvigil.constants.storage import CACHE_KEY_PREFIX
from scamvigil.model import CacheEntry, ScanResult
from scamvigil.storage import StorageArea
from scamvigil.types import CacheEntryPayload

logger = logging.getLogger(__name__)


def now_ms(clock: Callable[[], float] = time.time) -> int:
    """Return wall-clock time in epoch milliseconds."""
    return int(clock() * 1000)


def storage_key(key: str) -> str:
    """Return the namespaced storage key for a subject key."""
    return f"{CACHE_KEY_PREFIX}{key}"


class ResultCache:
    """Scan results keyed by subject key, persisted in the local scope.

    Freshness is evaluated lazily on read; nothing is evicted proactively.
    """

    def __init__(
        self,
        area: StorageArea,
        *,
        ttl_seconds: int = DEFAULT_CACHE_TTL_HOURS * 3600,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._area = area
        self.ttl_ms = ttl_seconds * 1000
        self._clock = clock

    def now(self) -> int:
        """Current time in epoch milliseconds, from this cache's clock."""
        return now_ms(self._clock)

    async def get_entry(self, key: str) -> CacheEntry | None:
        """Return the stored entry for ``key`` regardless of age, or None."""
        raw = await self._area.get_value(storage_key(key))
        return _load_entry(key, raw)

    async def lookup(self, key: str) -> ScanResult | None:
        """Return the cached result when present and fresh."""
        entry = await self.get_entry(key)
        if entry is None:
            logger.debug("Cache miss: %s", key)
            return None
        if not self.is_fresh(entry):
            logger.debug("Cache entry stale: %s", key)
            return None
        logger.debug("Cache hit: %s", key)
        return entry.result

    async def store(self, key: str, result: ScanResult) -> CacheEntry:
        """Overwrite any existing entry for ``key``."""
        entry = CacheEntry(key=key, result=result, stored_at=self.now())
        payload: CacheEntryPayload = {
            "key": entry.key,
            "storedAt": entry.stored_at,
            "result": result.to_payload(),
        }
        await self._area.set({storage_key(key): payload})  # type: ignore[dict-item]
        return entry

    def is_fresh(self, entry: CacheEntry) -> bool:
        """Fresh iff ``now - storedAt < TTL``."""
        return self.now() - entry.stored_at < self.ttl_ms


def _load_entry(key: str, raw: object) -> CacheEntry | None:
    if not isinstance(raw, dict):
        return None

    stored_at = raw.get("storedAt")
    if isinstance(stored_at, bool) or not isinstance(stored_at, int):
        logger.debug("Ignoring cache entry without storedAt: %s", key)
        return None

    result = ScanResult.from_payload(raw.get("result"))
    if result is None:
        logger.debug("Ignoring malformed cached result: %s", key)
        return None
    return CacheEntry(key=key, result=result, stored_at=stored_at)
