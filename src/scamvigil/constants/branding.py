"""Branding strings used by the host CLI."""

from __future__ import annotations

PRODUCT_NAME: str = "ScamVigil"

CLI_DESCRIPTION: str = (
    f"{PRODUCT_NAME} scan host.\n\n"
    f"Routes profile, link, email, and message scans to the {PRODUCT_NAME} backend,\n"
    "caches profile results, and polls the watchlist for new alerts."
)
