"""Persistent key/value storage scopes (synced and local).

Every read and write is an ``await`` point, so a user-triggered scan and the
scheduled poller may interleave between calls. ``set``, ``remove`` and
``swap`` hold a per-area lock across their read-modify-write so concurrent
writers never lose each other's keys.
"""

from __future__ import annotations

import asyncio
import copy
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path

from scamvigil.constants.storage import (
    LOCAL_STORAGE_FILENAME,
    STORAGE_TEMP_PREFIX,
    STORAGE_TEMP_SUFFIX,
    SYNC_STORAGE_FILENAME,
)
from scamvigil.io import read_json_object, write_json_atomic
from scamvigil.types import JsonValue

logger = logging.getLogger(__name__)


class StorageArea(ABC):
    """A single storage scope holding JSON values under string keys."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()

    @abstractmethod
    async def _read_all(self) -> dict[str, JsonValue]:
        """Return a private copy of every stored item."""

    @abstractmethod
    async def _write_all(self, items: dict[str, JsonValue]) -> None:
        """Replace the stored items."""

    async def get(self, keys: Iterable[str] | None = None) -> dict[str, JsonValue]:
        """Return stored items, limited to ``keys`` when given. Absent keys are omitted."""
        items = await self._read_all()
        if keys is None:
            return items
        return {key: items[key] for key in keys if key in items}

    async def get_value(self, key: str) -> JsonValue:
        """Return one stored value, or None when absent."""
        items = await self.get((key,))
        return items.get(key)

    async def set(self, items: Mapping[str, JsonValue]) -> None:
        """Merge ``items`` into the stored items."""
        async with self._lock:
            current = await self._read_all()
            current.update(items)
            await self._write_all(current)

    async def remove(self, keys: Iterable[str]) -> None:
        """Delete ``keys``; missing keys are ignored."""
        async with self._lock:
            current = await self._read_all()
            for key in keys:
                current.pop(key, None)
            await self._write_all(current)

    async def swap(self, key: str, value: JsonValue) -> JsonValue:
        """Store ``value`` under ``key`` and return the previous value in one step."""
        async with self._lock:
            current = await self._read_all()
            previous = current.get(key)
            current[key] = value
            await self._write_all(current)
        return previous


class MemoryStorageArea(StorageArea):
    """In-process storage area."""

    def __init__(self, initial: Mapping[str, JsonValue] | None = None) -> None:
        super().__init__()
        self._items: dict[str, JsonValue] = copy.deepcopy(dict(initial or {}))

    async def _read_all(self) -> dict[str, JsonValue]:
        return copy.deepcopy(self._items)

    async def _write_all(self, items: dict[str, JsonValue]) -> None:
        self._items = copy.deepcopy(items)


class JsonFileStorageArea(StorageArea):
    """Storage area persisted as a single JSON object on disk."""

    def __init__(self, path: Path) -> None:
        super().__init__()
        self.path = path

    async def _read_all(self) -> dict[str, JsonValue]:
        return await asyncio.to_thread(self._load)

    async def _write_all(self, items: dict[str, JsonValue]) -> None:
        await asyncio.to_thread(
            write_json_atomic,
            self.path,
            items,
            temp_prefix=STORAGE_TEMP_PREFIX,
            temp_suffix=STORAGE_TEMP_SUFFIX,
        )

    def _load(self) -> dict[str, JsonValue]:
        try:
            items = read_json_object(self.path)
        except (OSError, ValueError) as exc:
            logger.warning("Unreadable storage file %s, starting empty: %s", self.path, exc)
            return {}
        return items if items is not None else {}


@dataclass(frozen=True)
class HostStorage:
    """The two storage scopes this layer reads: synced settings and local state."""

    sync: StorageArea
    local: StorageArea

    @classmethod
    def in_memory(
        cls,
        *,
        sync: Mapping[str, JsonValue] | None = None,
        local: Mapping[str, JsonValue] | None = None,
    ) -> HostStorage:
        """Build memory-backed scopes, optionally pre-populated."""
        return cls(sync=MemoryStorageArea(sync), local=MemoryStorageArea(local))

    @classmethod
    def from_directory(cls, directory: Path) -> HostStorage:
        """Build file-backed scopes under ``directory``."""
        return cls(
            sync=JsonFileStorageArea(directory / SYNC_STORAGE_FILENAME),
            local=JsonFileStorageArea(directory / LOCAL_STORAGE_FILENAME),
        )
