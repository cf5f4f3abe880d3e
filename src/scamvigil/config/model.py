"""Config data model for the ScamVigil host."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from scamvigil.constants.config import (
    DEFAULT_CACHE_TTL_HOURS,
    DEFAULT_POLL_INTERVAL_MINUTES,
    DEFAULT_STORAGE_DIR,
)


@dataclass(frozen=True)
class VigilConfig:
    """Resolved operator config."""

    storage_dir: Path = Path(DEFAULT_STORAGE_DIR).expanduser()
    backend_url: str | None = None
    request_timeout_seconds: float | None = None
    poll_interval_minutes: int = DEFAULT_POLL_INTERVAL_MINUTES
    cache_ttl_hours: int = DEFAULT_CACHE_TTL_HOURS

    @property
    def cache_ttl_seconds(self) -> int:
        """Profile cache freshness window in seconds."""
        return self.cache_ttl_hours * 3600
