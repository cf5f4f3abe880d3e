"""Map backend scan responses onto the normalized result vocabulary.

Profile scans use ``low``/``medium``/``high``; link and email scans use
``safe``/``suspicious``/``high_risk``; message scans pass the backend label
through. UI surfaces switch on these exact strings.
"""

from __future__ import annotations

import re

from scamvigil.constants.risk import (
    DISPOSABLE_EMAIL_MARKERS,
    EMAIL_RISK_FALLBACK,
    EMAIL_RISK_MAP,
    FINDINGS_SEPARATOR,
    FREE_EMAIL_PROVIDERS,
    LINK_RISK_FALLBACK,
    LINK_RISK_MAP,
    MALWARE_THREAT_MARKERS,
    MAX_FALLBACK_PROFILE_FLAGS,
    MAX_FLAGS,
    MESSAGE_RECOMMENDATION_DEFAULT,
    MESSAGE_RISK_DEFAULT,
    PHISHING_THREAT_MARKERS,
    PROFILE_RISK_FALLBACK,
    PROFILE_RISK_MAP,
    WARNING_INSIGHT_TYPES,
)
from scamvigil.model import EmailScan, LinkScan, MessageScan, ProfileScan, ScanResult
from scamvigil.scanner.subjects import extract_email, subject_key
from scamvigil.types import JsonObject, JsonValue

_VALID_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_profile_risk(label: object) -> str:
    """``real`` -> low, ``suspicious`` -> medium, anything else -> high."""
    return PROFILE_RISK_MAP.get(label, PROFILE_RISK_FALLBACK) if isinstance(label, str) else PROFILE_RISK_FALLBACK


def normalize_link_risk(label: object) -> str:
    """``safe`` and ``suspicious`` pass through, ``dangerous`` -> high_risk."""
    return LINK_RISK_MAP.get(label, LINK_RISK_FALLBACK) if isinstance(label, str) else LINK_RISK_FALLBACK


def normalize_email_risk(label: object) -> str:
    """``legitimate`` -> safe, ``fake`` -> high_risk, anything else -> suspicious."""
    return EMAIL_RISK_MAP.get(label, EMAIL_RISK_FALLBACK) if isinstance(label, str) else EMAIL_RISK_FALLBACK


def normalize_message_risk(label: object) -> str:
    """Message labels are already three-level; only a missing label is defaulted."""
    return label if isinstance(label, str) and label else MESSAGE_RISK_DEFAULT


def extract_profile_flags(insights: object) -> list[str]:
    """Prefer warning/critical insight texts (max 6), else the first 4 of any type."""
    entries = insights if isinstance(insights, list) else []
    warning_texts = [
        entry["text"]
        for entry in entries
        if isinstance(entry, dict)
        and entry.get("type") in WARNING_INSIGHT_TYPES
        and isinstance(entry.get("text"), str)
        and entry["text"]
    ]
    if warning_texts:
        return warning_texts[:MAX_FLAGS]

    info_texts = [
        entry["text"]
        for entry in entries
        if isinstance(entry, dict) and isinstance(entry.get("text"), str) and entry["text"]
    ]
    return info_texts[:MAX_FALLBACK_PROFILE_FLAGS]


def build_profile_result(request: ProfileScan, analysis: JsonObject, *, scanned_at: int) -> ScanResult:
    """Normalize a ``scans.scanProfile`` response."""
    reasoning = analysis.get("reasoning")
    narrative = reasoning if isinstance(reasoning, str) else ""
    score = _number(analysis.get("trustScore"))
    return ScanResult(
        subject_key=subject_key(request),
        scan_type="profile",
        risk_level=normalize_profile_risk(analysis.get("riskLevel")),
        score=score,
        flags=tuple(extract_profile_flags(analysis.get("insights"))),
        narrative=narrative,
        scanned_at=scanned_at,
        attributes={
            "profileUrl": request.profile_url,
            "platform": request.platform,
            "analysis": narrative,
        },
    )


def build_link_result(request: LinkScan, scan: JsonObject, *, scanned_at: int) -> ScanResult:
    """Normalize a ``security.scanLink`` response."""
    threats = _dict_items(scan.get("threats"))
    findings = _descriptions(threats)
    recommendation = scan.get("recommendation")
    summary = recommendation if isinstance(recommendation, str) else ""
    threat_types = [_lower_type(threat) for threat in threats]
    return ScanResult(
        subject_key=subject_key(request),
        scan_type="link",
        risk_level=normalize_link_risk(scan.get("riskLevel")),
        score=_number(scan.get("safetyScore")),
        flags=tuple(findings[:MAX_FLAGS]),
        narrative=summary,
        scanned_at=scanned_at,
        attributes={
            "url": request.url,
            "summary": summary,
            "details": FINDINGS_SEPARATOR.join(findings),
            "isPhishing": any(_has_marker(kind, PHISHING_THREAT_MARKERS) for kind in threat_types),
            "isMalware": any(_has_marker(kind, MALWARE_THREAT_MARKERS) for kind in threat_types),
        },
    )


def build_email_result(request: EmailScan, scan: JsonObject, *, scanned_at: int) -> ScanResult:
    """Normalize a ``security.verifyEmail`` response."""
    email = extract_email(request.email_text)
    risks = _dict_items(scan.get("risks"))
    findings = _descriptions(risks)
    recommendation = scan.get("recommendation")
    recommendation_text = recommendation if isinstance(recommendation, str) else ""
    details = FINDINGS_SEPARATOR.join(findings) or recommendation_text
    trust_score = _number(scan.get("trustScore"))
    domain = email.split("@")[1].lower() if "@" in email else ""
    return ScanResult(
        subject_key=subject_key(request),
        scan_type="email",
        risk_level=normalize_email_risk(scan.get("riskLevel")),
        score=max(0, min(100, 100 - trust_score)),
        flags=tuple(findings[:MAX_FLAGS]),
        narrative=details,
        scanned_at=scanned_at,
        attributes={
            "email": email,
            "isValid": bool(_VALID_EMAIL.match(email)),
            "isDisposable": any(_has_marker(_lower_type(risk), DISPOSABLE_EMAIL_MARKERS) for risk in risks),
            "isFreeProvider": domain in FREE_EMAIL_PROVIDERS,
            "details": details,
        },
    )


def build_message_result(request: MessageScan, scan: JsonObject, *, scanned_at: int) -> ScanResult:
    """Normalize a ``messageScans.scanMessage`` response."""
    patterns = scan.get("detectedPatterns")
    detected: list[JsonValue] = patterns if isinstance(patterns, list) else []
    flags = [
        pattern if isinstance(pattern, str) else pattern.get("description")
        for pattern in detected
        if isinstance(pattern, (str, dict))
    ]
    recommendation = scan.get("recommendation")
    recommendation_text = (
        recommendation if isinstance(recommendation, str) and recommendation else MESSAGE_RECOMMENDATION_DEFAULT
    )
    return ScanResult(
        subject_key=subject_key(request),
        scan_type="message",
        risk_level=normalize_message_risk(scan.get("riskLevel")),
        score=_number(scan.get("riskScore")),
        flags=tuple(flag for flag in flags if isinstance(flag, str) and flag)[:MAX_FLAGS],
        narrative=recommendation_text,
        scanned_at=scanned_at,
        attributes={
            "detectedPatterns": detected,
            "recommendation": recommendation_text,
        },
    )


def _number(value: object) -> int:
    """Coerce a backend score to int; missing or non-numeric scores become 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return int(round(value))


def _dict_items(value: object) -> list[dict[str, JsonValue]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _descriptions(items: list[dict[str, JsonValue]]) -> list[str]:
    return [item["description"] for item in items if isinstance(item.get("description"), str) and item["description"]]


def _lower_type(item: dict[str, JsonValue]) -> str:
    kind = item.get("type")
    return kind.lower() if isinstance(kind, str) else ""


def _has_marker(value: str, markers: tuple[str, ...]) -> bool:
    return any(marker in value for marker in markers)
