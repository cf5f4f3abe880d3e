"""Shared type aliases for ScamVigil."""

from .common import (
    JsonObject,
    JsonScalar,
    JsonValue,
    NotificationKind,
    RpcVerb,
    ScanType,
)
from .storage import CacheEntryPayload

__all__ = [
    "CacheEntryPayload",
    "JsonObject",
    "JsonScalar",
    "JsonValue",
    "NotificationKind",
    "RpcVerb",
    "ScanType",
]
