"""Domain entities shared across the router, cache, and poller."""

from __future__ import annotations

from dataclasses import dataclass, field

from scamvigil.constants.risk import SCORE_FIELD_BY_SCAN_TYPE
from scamvigil.constants.storage import (
    ALERT_LEVEL_KEY,
    AUTO_SCAN_KEY,
    DEFAULT_ALERT_LEVEL,
    NOTIFICATIONS_ENABLED_KEY,
    VALID_ALERT_LEVELS,
    WATCHLIST_ALERTS_KEY,
)
from scamvigil.types import JsonObject, JsonValue, NotificationKind, ScanType

_VALID_SCAN_TYPES: frozenset[str] = frozenset(SCORE_FIELD_BY_SCAN_TYPE)
_COMMON_RESULT_KEYS: frozenset[str] = frozenset(
    {"subjectKey", "scanType", "riskLevel", "flags", "narrative", "scannedAt"}
)


@dataclass(frozen=True)
class ProfileScan:
    """Social profile scan request."""

    profile_url: str
    platform: str
    profile_data: JsonObject | None = None


@dataclass(frozen=True)
class LinkScan:
    """URL scan request."""

    url: str


@dataclass(frozen=True)
class EmailScan:
    """Email sender verification request; ``email_text`` may contain surrounding text."""

    email_text: str


@dataclass(frozen=True)
class MessageScan:
    """Free-text message scan request."""

    text: str


type ScanRequest = ProfileScan | LinkScan | EmailScan | MessageScan


@dataclass(frozen=True)
class ScanResult:
    """Normalized scan output consumed by UI surfaces and the notification policy.

    ``score`` is a trust score for profile and link scans and a risk score for
    email and message scans; ``to_payload`` emits it under the matching wire
    name. ``attributes`` holds the scan-type specific fields UI surfaces read.
    """

    subject_key: str
    scan_type: ScanType
    risk_level: str
    score: int
    flags: tuple[str, ...] = ()
    narrative: str = ""
    scanned_at: int = 0
    attributes: JsonObject = field(default_factory=dict)

    def to_payload(self) -> JsonObject:
        """Serialize to the camelCase wire/storage form."""
        payload: JsonObject = dict(self.attributes)
        payload.update(
            {
                "subjectKey": self.subject_key,
                "scanType": self.scan_type,
                "riskLevel": self.risk_level,
                SCORE_FIELD_BY_SCAN_TYPE[self.scan_type]: self.score,
                "flags": list(self.flags),
                "narrative": self.narrative,
                "scannedAt": self.scanned_at,
            }
        )
        return payload

    @classmethod
    def from_payload(cls, payload: object) -> ScanResult | None:
        """Rebuild a result from its wire form, returning None when malformed."""
        if not isinstance(payload, dict):
            return None

        subject_key = payload.get("subjectKey")
        scan_type = payload.get("scanType")
        risk_level = payload.get("riskLevel")
        scanned_at = payload.get("scannedAt")
        if not isinstance(subject_key, str) or not subject_key:
            return None
        if scan_type not in _VALID_SCAN_TYPES:
            return None
        if not isinstance(risk_level, str):
            return None
        if isinstance(scanned_at, bool) or not isinstance(scanned_at, int):
            return None

        score_field = SCORE_FIELD_BY_SCAN_TYPE[scan_type]
        score = payload.get(score_field)
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            return None

        flags = payload.get("flags")
        if not isinstance(flags, list):
            flags = []
        narrative = payload.get("narrative")

        attributes: JsonObject = {
            key: value
            for key, value in payload.items()
            if isinstance(key, str) and key not in _COMMON_RESULT_KEYS and key != score_field
        }
        return cls(
            subject_key=subject_key,
            scan_type=scan_type,
            risk_level=risk_level,
            score=int(score),
            flags=tuple(flag for flag in flags if isinstance(flag, str)),
            narrative=narrative if isinstance(narrative, str) else "",
            scanned_at=scanned_at,
            attributes=attributes,
        )


@dataclass(frozen=True)
class CacheEntry:
    """A cached scan result and the wall-clock time (ms) it was stored."""

    key: str
    result: ScanResult
    stored_at: int


@dataclass(frozen=True)
class WatchlistAlert:
    """Monitoring alert received from the backend."""

    alert_id: str
    severity: str
    title: str = ""
    details: str = ""
    profile_url: str | None = None

    @classmethod
    def from_payload(cls, payload: object) -> WatchlistAlert | None:
        """Parse a backend alert object; alerts without an id cannot be deduplicated."""
        if not isinstance(payload, dict):
            return None
        alert_id = payload.get("alertId")
        if not isinstance(alert_id, str) or not alert_id:
            return None

        severity = payload.get("severity")
        title = payload.get("title")
        details = payload.get("details")
        profile_url = payload.get("profileUrl")
        return cls(
            alert_id=alert_id,
            severity=severity if isinstance(severity, str) else "info",
            title=title if isinstance(title, str) else "",
            details=details if isinstance(details, str) else "",
            profile_url=profile_url if isinstance(profile_url, str) else None,
        )


@dataclass(frozen=True)
class AuthCredential:
    """Bearer token and backend base URL from the synced scope."""

    token: str
    backend_url: str | None = None


@dataclass(frozen=True)
class Preferences:
    """User preference flags from the synced scope."""

    auto_scan: bool = False
    notifications_enabled: bool = True
    watchlist_alerts: bool = True
    alert_level: str = DEFAULT_ALERT_LEVEL

    @classmethod
    def from_storage(cls, raw: dict[str, JsonValue]) -> Preferences:
        """Build preferences; only an explicit ``False`` disables a default-on flag."""
        alert_level = raw.get(ALERT_LEVEL_KEY)
        return cls(
            auto_scan=raw.get(AUTO_SCAN_KEY) is True,
            notifications_enabled=raw.get(NOTIFICATIONS_ENABLED_KEY) is not False,
            watchlist_alerts=raw.get(WATCHLIST_ALERTS_KEY) is not False,
            alert_level=alert_level if alert_level in VALID_ALERT_LEVELS else DEFAULT_ALERT_LEVEL,  # type: ignore[arg-type]
        )


@dataclass(frozen=True)
class Notification:
    """A host notification ready to be shown."""

    kind: NotificationKind
    title: str
    message: str
    priority: int
