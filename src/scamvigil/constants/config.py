"""Operator configuration defaults and filenames."""

from __future__ import annotations

CONFIG_FILENAME: str = "scamvigil.yaml"
DEFAULT_STORAGE_DIR: str = "~/.scamvigil"

DEFAULT_POLL_INTERVAL_MINUTES: int = 15
# Host alarm granularity is coarse; sub-minute polling is not supported.
MIN_POLL_INTERVAL_MINUTES: int = 1

DEFAULT_CACHE_TTL_HOURS: int = 24

ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset(
    {
        "storage_dir",
        "backend_url",
        "request_timeout_seconds",
        "poll_interval_minutes",
        "cache_ttl_hours",
    }
)
