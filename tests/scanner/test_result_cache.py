"""Tests for the TTL-bounded result cache."""

from __future__ import annotations

import asyncio

from scamvigil.model import ScanResult
from scamvigil.scanner.cache import ResultCache, storage_key
from scamvigil.storage import MemoryStorageArea

TTL_SECONDS = 24 * 3600


class _Clock:
    def __init__(self) -> None:
        self.now = 1_700_000_000.0

    def __call__(self) -> float:
        return self.now


def _result(score: int = 40) -> ScanResult:
    return ScanResult(
        subject_key="profile:https://x.com/a",
        scan_type="profile",
        risk_level="medium",
        score=score,
        flags=("New account",),
        scanned_at=1,
        attributes={"platform": "twitter"},
    )


def test_lookup_returns_fresh_entry() -> None:
    clock = _Clock()
    cache = ResultCache(MemoryStorageArea(), ttl_seconds=TTL_SECONDS, clock=clock)

    async def scenario() -> ScanResult | None:
        await cache.store("profile:https://x.com/a", _result())
        clock.now += TTL_SECONDS - 1
        return await cache.lookup("profile:https://x.com/a")

    assert asyncio.run(scenario()) == _result()


def test_lookup_treats_entry_at_ttl_as_stale() -> None:
    clock = _Clock()
    cache = ResultCache(MemoryStorageArea(), ttl_seconds=TTL_SECONDS, clock=clock)

    async def scenario() -> tuple[ScanResult | None, bool]:
        await cache.store("profile:https://x.com/a", _result())
        clock.now += TTL_SECONDS
        entry = await cache.get_entry("profile:https://x.com/a")
        return await cache.lookup("profile:https://x.com/a"), entry is not None

    fresh, still_stored = asyncio.run(scenario())
    assert fresh is None
    assert still_stored


def test_store_overwrites_previous_entry() -> None:
    area = MemoryStorageArea()
    cache = ResultCache(area, ttl_seconds=TTL_SECONDS, clock=_Clock())

    async def scenario() -> ScanResult | None:
        await cache.store("profile:https://x.com/a", _result(10))
        await cache.store("profile:https://x.com/a", _result(90))
        return await cache.lookup("profile:https://x.com/a")

    result = asyncio.run(scenario())
    assert result is not None
    assert result.score == 90


def test_store_persists_namespaced_payload() -> None:
    area = MemoryStorageArea()
    cache = ResultCache(area, ttl_seconds=TTL_SECONDS, clock=_Clock())

    asyncio.run(cache.store("profile:https://x.com/a", _result()))
    raw = asyncio.run(area.get_value(storage_key("profile:https://x.com/a")))

    assert raw["key"] == "profile:https://x.com/a"
    assert raw["storedAt"] == 1_700_000_000_000
    assert raw["result"]["trustScore"] == 40


def test_malformed_entries_are_misses() -> None:
    area = MemoryStorageArea(
        {
            storage_key("a"): "not-an-entry",
            storage_key("b"): {"storedAt": "yesterday", "result": {}},
            storage_key("c"): {"storedAt": 1_700_000_000_000, "result": {"scanType": "profile"}},
        }
    )
    cache = ResultCache(area, ttl_seconds=TTL_SECONDS, clock=_Clock())

    async def scenario() -> list[ScanResult | None]:
        return [await cache.lookup(key) for key in ("a", "b", "c", "missing")]

    assert asyncio.run(scenario()) == [None, None, None, None]
