"""Typed payloads persisted in the local storage scope."""

from __future__ import annotations

from typing import TypedDict

from scamvigil.types.common import JsonObject


class CacheEntryPayload(TypedDict):
    """Persisted form of a cached scan result."""

    key: str
    storedAt: int
    result: JsonObject
