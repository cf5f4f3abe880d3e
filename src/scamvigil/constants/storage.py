"""Storage scope filenames and persisted key names."""

from __future__ import annotations

SYNC_STORAGE_FILENAME: str = "sync.json"
LOCAL_STORAGE_FILENAME: str = "local.json"
STORAGE_TEMP_PREFIX: str = ".storage-"
STORAGE_TEMP_SUFFIX: str = ".tmp"

# Synced scope
AUTH_TOKEN_KEY: str = "authToken"
BACKEND_URL_KEY: str = "backendUrl"
AUTO_SCAN_KEY: str = "autoScan"
NOTIFICATIONS_ENABLED_KEY: str = "notificationsEnabled"
WATCHLIST_ALERTS_KEY: str = "watchlistAlerts"
ALERT_LEVEL_KEY: str = "alertLevel"
VALID_ALERT_LEVELS: frozenset[str] = frozenset({"low", "medium", "high"})
DEFAULT_ALERT_LEVEL: str = "medium"

# Local scope
CACHE_KEY_PREFIX: str = "scan_"
LAST_NOTIFIED_ALERT_KEY: str = "lastNotifiedAlertId"
