"""Core data models for ScamVigil."""

from .entities import (
    AuthCredential,
    CacheEntry,
    EmailScan,
    LinkScan,
    MessageScan,
    Notification,
    Preferences,
    ProfileScan,
    ScanRequest,
    ScanResult,
    WatchlistAlert,
)

__all__ = [
    "AuthCredential",
    "CacheEntry",
    "EmailScan",
    "LinkScan",
    "MessageScan",
    "Notification",
    "Preferences",
    "ProfileScan",
    "ScanRequest",
    "ScanResult",
    "WatchlistAlert",
]
