"""Tests for request routing and the response envelope."""

from __future__ import annotations

import asyncio

import pytest

from scamvigil.constants.backend import SCAN_LINK_PATH, SCAN_MESSAGE_PATH, SCAN_PROFILE_PATH, VERIFY_EMAIL_PATH
from scamvigil.constants.messages import NOT_SIGNED_IN_MESSAGE, VALID_ACTIONS

PROFILE_URL = "https://twitter.com/someone"


def test_router_accepts_every_documented_action(make_runtime) -> None:
    assert set(make_runtime().router.actions) == set(VALID_ACTIONS)


def test_perform_scan_returns_success_envelope(make_runtime, backend, push_channel) -> None:
    backend.respond(SCAN_PROFILE_PATH, {"trustScore": 55, "riskLevel": "suspicious", "insights": []})
    runtime = make_runtime()
    message = {
        "action": "performScan",
        "data": {"profileUrl": PROFILE_URL, "profileData": {"followers": 12, "name": "Some One"}},
    }

    envelope = asyncio.run(runtime.router.handle(message, "tab-7"))

    assert envelope["success"] is True
    assert envelope["result"]["riskLevel"] == "medium"
    assert envelope["result"]["platform"] == "twitter"
    assert backend.calls_to(SCAN_PROFILE_PATH)[0].args["profileData"] == {"followerCount": 12}
    assert push_channel.pushes == [("tab-7", {"action": "scanComplete", "result": envelope["result"]})]


def test_get_scan_result_without_entry_is_success_with_null(make_runtime, backend) -> None:
    envelope = asyncio.run(make_runtime().router.handle({"action": "getScanResult", "profileUrl": PROFILE_URL}))

    assert envelope == {"success": True, "result": None}
    assert backend.calls == []


def test_get_scan_result_returns_cached_profile(make_runtime, backend) -> None:
    backend.respond(SCAN_PROFILE_PATH, {"trustScore": 80, "riskLevel": "real"})
    runtime = make_runtime()

    async def scenario():
        await runtime.router.handle({"action": "performScan", "url": PROFILE_URL})
        return await runtime.router.handle({"action": "getScanResult", "profileUrl": PROFILE_URL})

    envelope = asyncio.run(scenario())

    assert envelope["success"] is True
    assert envelope["result"]["trustScore"] == 80
    assert len(backend.calls_to(SCAN_PROFILE_PATH)) == 1


@pytest.mark.parametrize(
    ("message", "error"),
    [
        ({"action": "teleport"}, "Unknown action: teleport"),
        ({}, "Invalid message"),
        ("scanLink", "Invalid message"),
        ({"action": "getScanResult"}, "Missing profile URL"),
        ({"action": "scanLink", "url": ""}, "Missing URL"),
        ({"action": "scanMessage", "text": ""}, "Missing text"),
    ],
)
def test_invalid_requests_become_error_envelopes(make_runtime, backend, message, error) -> None:
    envelope = asyncio.run(make_runtime().router.handle(message))

    assert envelope == {"success": False, "error": error}
    assert backend.calls == []


def test_mistyped_field_is_rejected_before_handler(make_runtime, backend) -> None:
    envelope = asyncio.run(make_runtime().router.handle({"action": "scanLink", "url": 42}))

    assert envelope["success"] is False
    assert envelope["error"].startswith("Invalid request field 'url'")
    assert backend.calls == []


def test_not_signed_in_error_message(make_runtime, backend) -> None:
    envelope = asyncio.run(make_runtime(signed_in=False).router.handle({"action": "scanLink", "url": "http://x.test"}))

    assert envelope == {"success": False, "error": NOT_SIGNED_IN_MESSAGE}
    assert backend.calls == []


def test_backend_error_is_reported_in_envelope(make_runtime, backend) -> None:
    backend.fail(SCAN_LINK_PATH, 500)

    envelope = asyncio.run(make_runtime().router.handle({"action": "scanLink", "url": "http://x.test"}))

    assert envelope["success"] is False
    assert envelope["error"].startswith("Action failed")


def test_context_menu_dispatches_to_scans(make_runtime, backend, push_channel) -> None:
    backend.respond(SCAN_LINK_PATH, {"safetyScore": 70, "riskLevel": "suspicious"})
    backend.respond(SCAN_MESSAGE_PATH, {"riskScore": 5, "riskLevel": "safe"})
    backend.respond(VERIFY_EMAIL_PATH, {"trustScore": 90, "riskLevel": "legitimate"})
    router = make_runtime().router

    async def scenario():
        return [
            await router.handle_context_menu("scan-link", {"linkUrl": "http://x.test"}, "tab-1"),
            await router.handle_context_menu("scan-selection", {"selectionText": "hello"}, "tab-1"),
            await router.handle_context_menu("scan-email", {"selectionText": "a@b.example"}, "tab-1"),
            await router.handle_context_menu("something-else", {}, "tab-1"),
        ]

    link, message, email, unknown = asyncio.run(scenario())

    assert (link.scan_type, message.scan_type, email.scan_type) == ("link", "message", "email")
    assert unknown is None
    assert [push[1]["action"] for push in push_channel.pushes] == [
        "linkScanComplete",
        "messageScanComplete",
        "emailScanComplete",
    ]


def test_context_menu_failures_are_swallowed(make_runtime, backend) -> None:
    router = make_runtime(signed_in=False).router

    assert asyncio.run(router.handle_context_menu("scan-link", {"linkUrl": "http://x.test"})) is None
    assert backend.calls == []


def test_signed_out_user_does_not_see_cached_profile(make_runtime, backend) -> None:
    backend.respond(SCAN_PROFILE_PATH, {"trustScore": 80, "riskLevel": "real"})
    runtime = make_runtime()
    message = {"action": "performScan", "url": PROFILE_URL}

    async def scenario():
        first = await runtime.router.handle(message)
        await runtime.auth_gate.sign_out()
        calls_before = len(backend.calls)
        second = await runtime.router.handle(message)
        return first, second, calls_before

    first, second, calls_before = asyncio.run(scenario())

    assert first["success"] is True
    assert second == {"success": False, "error": NOT_SIGNED_IN_MESSAGE}
    assert len(backend.calls) == calls_before
