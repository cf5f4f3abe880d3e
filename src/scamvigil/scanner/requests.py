"""Parse inbound request messages into typed scan requests."""

from __future__ import annotations

from collections.abc import Mapping

from jsonschema import Draft202012Validator

from scamvigil.constants.messages import (
    ACTION_PERFORM_SCAN,
    ACTION_SCAN_EMAIL,
    ACTION_SCAN_LINK,
    ACTION_SCAN_MESSAGE,
    REQUEST_SCHEMAS,
)
from scamvigil.exceptions import MissingInputError
from scamvigil.model import EmailScan, LinkScan, MessageScan, ProfileScan, ScanRequest
from scamvigil.types import JsonObject, JsonValue
from scamvigil.utils import infer_platform_from_url

_VALIDATORS: dict[str, Draft202012Validator] = {
    action: Draft202012Validator(schema) for action, schema in REQUEST_SCHEMAS.items()
}

_PROFILE_DATA_FIELDS: tuple[tuple[str, str], ...] = (
    ("followers", "followerCount"),
    ("following", "followingCount"),
    ("posts", "postCount"),
)


def validate_message(action: str, message: Mapping[str, JsonValue]) -> None:
    """Reject request fields whose types do not match the action's schema."""
    validator = _VALIDATORS.get(action)
    if validator is None:
        return
    errors = sorted(validator.iter_errors(dict(message)), key=lambda error: list(error.absolute_path))
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.absolute_path) or "<message>"
        raise MissingInputError(f"Invalid request field '{location}': {first.message}")


def parse_scan_request(action: str, message: Mapping[str, JsonValue]) -> ScanRequest:
    """Build the scan request variant for ``action``; only that variant's fields are read."""
    if action == ACTION_PERFORM_SCAN:
        data = message.get("data")
        data = data if isinstance(data, dict) else {}
        profile_url = _string(data.get("profileUrl")) or _string(message.get("url"))
        platform = (
            _string(data.get("platform")) or _string(message.get("platform")) or infer_platform_from_url(profile_url)
        )
        profile_data = data.get("profileData")
        return ProfileScan(
            profile_url=profile_url,
            platform=platform,
            profile_data=profile_data if isinstance(profile_data, dict) else None,
        )
    if action == ACTION_SCAN_LINK:
        return LinkScan(url=_string(message.get("url")))
    if action == ACTION_SCAN_EMAIL:
        return EmailScan(email_text=_string(message.get("email")))
    if action == ACTION_SCAN_MESSAGE:
        text = message.get("text")
        return MessageScan(text=text if isinstance(text, str) else "")
    raise ValueError(f"{action} is not a scan action")


def parse_profile_url(message: Mapping[str, JsonValue]) -> str:
    """Return the ``profileUrl`` field or raise ``MissingInputError``."""
    profile_url = _string(message.get("profileUrl"))
    if not profile_url:
        raise MissingInputError("Missing profile URL")
    return profile_url


def map_profile_data(profile_data: JsonObject | None) -> JsonObject | None:
    """Keep only the extracted profile fields the backend accepts."""
    if not isinstance(profile_data, dict):
        return None
    mapped: JsonObject = {}
    for source, target in _PROFILE_DATA_FIELDS:
        value = profile_data.get(source)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            mapped[target] = value
    bio = profile_data.get("bio")
    if isinstance(bio, str):
        mapped["bio"] = bio
    return mapped


def _string(value: JsonValue) -> str:
    return value.strip() if isinstance(value, str) else ""
