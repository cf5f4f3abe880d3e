"""Social platform inference from profile URLs."""

from __future__ import annotations

from scamvigil.constants.platforms import PLATFORM_URL_MARKERS, UNKNOWN_PLATFORM


def infer_platform_from_url(url: str | None) -> str:
    """Return the platform name whose marker appears in ``url``, else ``"unknown"``."""
    value = (url or "").lower()
    for platform, markers in PLATFORM_URL_MARKERS:
        if any(marker in value for marker in markers):
            return platform
    return UNKNOWN_PLATFORM
