"""Deterministic subject keys derived from scan inputs."""

from __future__ import annotations

import hashlib
import re

from scamvigil.model import EmailScan, LinkScan, MessageScan, ProfileScan, ScanRequest

_EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_MESSAGE_DIGEST_LENGTH = 16


def extract_email(email_text: str) -> str:
    """Return the first email address in ``email_text``, else the trimmed text."""
    match = _EMAIL_PATTERN.search(email_text)
    return match.group(0) if match else email_text.strip()


def profile_subject_key(profile_url: str) -> str:
    """Subject key for a profile URL."""
    return f"profile:{profile_url}"


def subject_key(request: ScanRequest) -> str:
    """Return the scan-type scoped key for ``request``.

    Keys depend only on the input so a cache lookup can happen before any
    backend call.
    """
    if isinstance(request, ProfileScan):
        return profile_subject_key(request.profile_url)
    if isinstance(request, LinkScan):
        return f"link:{request.url}"
    if isinstance(request, EmailScan):
        return f"email:{extract_email(request.email_text).lower()}"
    if isinstance(request, MessageScan):
        digest = hashlib.sha256(request.text.encode("utf-8")).hexdigest()
        return f"message:{digest[:_MESSAGE_DIGEST_LENGTH]}"
    raise TypeError(f"Unsupported scan request: {type(request).__name__}")
