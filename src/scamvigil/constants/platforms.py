"""Social platform detection markers."""

from __future__ import annotations

UNKNOWN_PLATFORM: str = "unknown"

# Checked in order; first matching marker wins.
PLATFORM_URL_MARKERS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("facebook", ("facebook.com",)),
    ("instagram", ("instagram.com",)),
    ("twitter", ("twitter.com", "x.com")),
    ("linkedin", ("linkedin.com",)),
)
