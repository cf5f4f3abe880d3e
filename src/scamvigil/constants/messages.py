"""Inbound request actions, outbound push actions, and request schemas."""

from __future__ import annotations

from typing import Any

ACTION_PERFORM_SCAN: str = "performScan"
ACTION_SCAN_LINK: str = "scanLink"
ACTION_SCAN_EMAIL: str = "scanEmail"
ACTION_SCAN_MESSAGE: str = "scanMessage"
ACTION_GET_SCAN_RESULT: str = "getScanResult"
ACTION_ADD_TO_WATCHLIST: str = "addToWatchlist"

VALID_ACTIONS: tuple[str, ...] = (
    ACTION_PERFORM_SCAN,
    ACTION_SCAN_LINK,
    ACTION_SCAN_EMAIL,
    ACTION_SCAN_MESSAGE,
    ACTION_GET_SCAN_RESULT,
    ACTION_ADD_TO_WATCHLIST,
)

PUSH_ACTION_BY_SCAN_TYPE: dict[str, str] = {
    "profile": "scanComplete",
    "link": "linkScanComplete",
    "email": "emailScanComplete",
    "message": "messageScanComplete",
}

MENU_SCAN_LINK: str = "scan-link"
MENU_SCAN_SELECTION: str = "scan-selection"
MENU_SCAN_EMAIL: str = "scan-email"

NOT_SIGNED_IN_MESSAGE: str = "Please sign in to ScamVigil in the extension first."
INVALID_MESSAGE: str = "Invalid message"
UNKNOWN_ERROR_MESSAGE: str = "Unknown error"

_OPTIONAL_STRING: dict[str, Any] = {"type": ["string", "null"]}
_OPTIONAL_OBJECT: dict[str, Any] = {"type": ["object", "null"]}

# Field shapes only; presence and emptiness are checked by the handlers so
# they can report a specific MissingInput message.
REQUEST_SCHEMAS: dict[str, dict[str, Any]] = {
    ACTION_PERFORM_SCAN: {
        "type": "object",
        "properties": {
            "url": _OPTIONAL_STRING,
            "platform": _OPTIONAL_STRING,
            "data": {
                "type": ["object", "null"],
                "properties": {
                    "profileUrl": _OPTIONAL_STRING,
                    "platform": _OPTIONAL_STRING,
                    "profileData": _OPTIONAL_OBJECT,
                },
            },
        },
    },
    ACTION_SCAN_LINK: {"type": "object", "properties": {"url": _OPTIONAL_STRING}},
    ACTION_SCAN_EMAIL: {"type": "object", "properties": {"email": _OPTIONAL_STRING}},
    ACTION_SCAN_MESSAGE: {"type": "object", "properties": {"text": _OPTIONAL_STRING}},
    ACTION_GET_SCAN_RESULT: {"type": "object", "properties": {"profileUrl": _OPTIONAL_STRING}},
    ACTION_ADD_TO_WATCHLIST: {"type": "object", "properties": {"profileUrl": _OPTIONAL_STRING}},
}
