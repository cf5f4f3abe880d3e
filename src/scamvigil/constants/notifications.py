"""Host notification kinds, titles, and watchlist scheduling constants."""

from __future__ import annotations

NOTIFICATION_ICONS: dict[str, str] = {
    "success": "✅",
    "warning": "⚠️",
    "error": "❌",
    "info": "ℹ️",
}
HIGH_PRIORITY_KINDS: frozenset[str] = frozenset({"error", "warning"})
HIGH_PRIORITY: int = 2
DEFAULT_PRIORITY: int = 1

ALERT_KIND_BY_SEVERITY: dict[str, str] = {"critical": "error", "high": "warning"}
ALERT_EMOJI_BY_SEVERITY: dict[str, str] = {"critical": "🚨", "high": "⚠️"}
ALERT_DEFAULT_KIND: str = "info"
ALERT_DEFAULT_EMOJI: str = "ℹ️"
ALERT_DEFAULT_TITLE: str = "Watchlist Alert"
ALERT_DEFAULT_DETAILS: str = "A watched profile changed"

HIGH_RISK_PROFILE_TITLE: str = "High Risk Profile Detected"
WATCHLIST_ADDED_TITLE: str = "Added to Watchlist"
WATCHLIST_ADDED_MESSAGE: str = "We'll monitor this profile for suspicious changes."

WATCHLIST_JOB_ID: str = "monitorWatchlist"
