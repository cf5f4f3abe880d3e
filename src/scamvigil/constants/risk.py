"""Risk vocabularies and normalization limits per scan type."""

from __future__ import annotations

# Profile track: low | medium | high. Unlisted labels normalize to "high".
PROFILE_RISK_MAP: dict[str, str] = {"real": "low", "suspicious": "medium"}
PROFILE_RISK_FALLBACK: str = "high"

# Link/email track: safe | suspicious | high_risk. UI code switches on these literals.
LINK_RISK_MAP: dict[str, str] = {"safe": "safe", "suspicious": "suspicious", "dangerous": "high_risk"}
LINK_RISK_FALLBACK: str = "suspicious"

EMAIL_RISK_MAP: dict[str, str] = {"legitimate": "safe", "fake": "high_risk"}
EMAIL_RISK_FALLBACK: str = "suspicious"

MESSAGE_RISK_DEFAULT: str = "safe"
MESSAGE_RECOMMENDATION_DEFAULT: str = "verify_manually"

MAX_FLAGS: int = 6
MAX_FALLBACK_PROFILE_FLAGS: int = 4
WARNING_INSIGHT_TYPES: frozenset[str] = frozenset({"warning", "critical"})

FINDINGS_SEPARATOR: str = " • "

PHISHING_THREAT_MARKERS: tuple[str, ...] = ("phish", "social")
MALWARE_THREAT_MARKERS: tuple[str, ...] = ("malware",)
DISPOSABLE_EMAIL_MARKERS: tuple[str, ...] = ("temporary",)

FREE_EMAIL_PROVIDERS: frozenset[str] = frozenset(
    {
        "gmail.com",
        "yahoo.com",
        "outlook.com",
        "hotmail.com",
        "icloud.com",
        "proton.me",
        "protonmail.com",
    }
)

# Wire field carrying the numeric score for each scan type.
SCORE_FIELD_BY_SCAN_TYPE: dict[str, str] = {
    "profile": "trustScore",
    "link": "trustScore",
    "email": "riskScore",
    "message": "riskScore",
}
