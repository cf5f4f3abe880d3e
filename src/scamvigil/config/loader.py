"""Config loading and normalization for the ScamVigil host."""

from __future__ import annotations

import difflib
from pathlib import Path
from typing import Any

import yaml

from scamvigil.config.model import VigilConfig
from scamvigil.constants.config import (
    ALLOWED_CONFIG_KEYS,
    CONFIG_FILENAME,
    DEFAULT_CACHE_TTL_HOURS,
    DEFAULT_POLL_INTERVAL_MINUTES,
    MIN_POLL_INTERVAL_MINUTES,
)
from scamvigil.exceptions import ConfigError


def load_config(root: Path, config_path: Path | None = None) -> VigilConfig:
    """Load and validate host config from ``scamvigil.yaml`` or an explicit path."""
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return VigilConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    for key in sorted(str(k) for k in raw):
        if key not in ALLOWED_CONFIG_KEYS:
            suggestion = _suggest_key(key)
            hint = f" (did you mean '{suggestion}'?)" if suggestion else ""
            raise ConfigError(f"Unknown config key '{key}'{hint}")

    storage_dir = VigilConfig().storage_dir
    storage_dir_raw = raw.get("storage_dir")
    if storage_dir_raw is not None:
        if not isinstance(storage_dir_raw, str) or not storage_dir_raw.strip():
            raise ConfigError("storage_dir must be a non-empty string")
        storage_dir = Path(storage_dir_raw).expanduser()
        if not storage_dir.is_absolute():
            storage_dir = path.parent / storage_dir

    return VigilConfig(
        storage_dir=storage_dir,
        backend_url=_optional_url(raw.get("backend_url"), "backend_url"),
        request_timeout_seconds=_optional_timeout(raw.get("request_timeout_seconds")),
        poll_interval_minutes=_positive_int(
            raw.get("poll_interval_minutes", DEFAULT_POLL_INTERVAL_MINUTES),
            "poll_interval_minutes",
            minimum=MIN_POLL_INTERVAL_MINUTES,
        ),
        cache_ttl_hours=_positive_int(
            raw.get("cache_ttl_hours", DEFAULT_CACHE_TTL_HOURS),
            "cache_ttl_hours",
            minimum=1,
        ),
    )


def _suggest_key(key: str) -> str | None:
    """Return the closest allowed config key, if any is similar enough."""
    matches = difflib.get_close_matches(key, sorted(ALLOWED_CONFIG_KEYS), n=1, cutoff=0.6)
    return matches[0] if matches else None


def _optional_url(value: Any, key_name: str) -> str | None:
    """Validate an optional http(s) base URL and strip trailing slashes."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"{key_name} must be a string")
    normalized = value.strip().rstrip("/")
    if not normalized:
        return None
    if not normalized.startswith(("http://", "https://")):
        raise ConfigError(f"{key_name} must start with http:// or https://, got {value!r}")
    return normalized


def _optional_timeout(value: Any) -> float | None:
    """Validate the optional request timeout; None keeps requests unbounded."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError("request_timeout_seconds must be a positive number")
    return float(value)


def _positive_int(value: Any, key_name: str, *, minimum: int) -> int:
    """Validate an integer setting against a lower bound."""
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ConfigError(f"{key_name} must be an integer >= {minimum}")
    return value
