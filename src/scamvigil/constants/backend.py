"""Backend RPC verbs, function paths, and request defaults."""

from __future__ import annotations

VERB_QUERY: str = "query"
VERB_MUTATION: str = "mutation"
VERB_ACTION: str = "action"

API_PATH_PREFIX: str = "/api"
RESPONSE_FORMAT: str = "json"

SCAN_PROFILE_PATH: str = "scans.scanProfile"
SAVE_SCAN_RESULT_PATH: str = "scans.saveScanResult"
SCAN_LINK_PATH: str = "security.scanLink"
VERIFY_EMAIL_PATH: str = "security.verifyEmail"
SAVE_SECURITY_SCAN_PATH: str = "security.saveSecurityScan"
SCAN_MESSAGE_PATH: str = "messageScans.scanMessage"
GET_MONITORING_ALERTS_PATH: str = "monitoring.getMonitoringAlerts"
ADD_TO_WATCHLIST_PATH: str = "monitoring.addToWatchlist"

REQUEST_SOURCE: str = "browser-extension"
DEFAULT_CHECK_FREQUENCY: str = "daily"
DEFAULT_INITIAL_TRUST_SCORE: int = 50

LINK_SCAN_FALLBACK_FINDING: str = "Link scan completed"
EMAIL_SCAN_FALLBACK_FINDING: str = "Email check completed"
