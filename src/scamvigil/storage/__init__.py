"""Host storage scopes."""

from .areas import HostStorage, JsonFileStorageArea, MemoryStorageArea, StorageArea

__all__ = ["HostStorage", "JsonFileStorageArea", "MemoryStorageArea", "StorageArea"]
