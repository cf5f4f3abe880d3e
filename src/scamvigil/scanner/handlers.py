"""Scan handlers: one coroutine per request type.

Profile scans consult the result cache first and skip the backend (and the
high-risk notification) on a fresh hit. Link, email, and message scans are
always evaluated remotely.
"""

from __future__ import annotations

import logging

from scamvigil.client import AuthGate, RemoteClient, save_best_effort
from scamvigil.constants.backend import (
    ADD_TO_WATCHLIST_PATH,
    DEFAULT_CHECK_FREQUENCY,
    DEFAULT_INITIAL_TRUST_SCORE,
    EMAIL_SCAN_FALLBACK_FINDING,
    LINK_SCAN_FALLBACK_FINDING,
    REQUEST_SOURCE,
    SAVE_SCAN_RESULT_PATH,
    SAVE_SECURITY_SCAN_PATH,
    SCAN_LINK_PATH,
    SCAN_MESSAGE_PATH,
    SCAN_PROFILE_PATH,
    VERIFY_EMAIL_PATH,
)
from scamvigil.constants.messages import PUSH_ACTION_BY_SCAN_TYPE
from scamvigil.constants.notifications import (
    HIGH_RISK_PROFILE_TITLE,
    WATCHLIST_ADDED_MESSAGE,
    WATCHLIST_ADDED_TITLE,
)
from scamvigil.exceptions import BackendError, MissingInputError
from scamvigil.host import Notifier, PushChannel, build_notification, push_best_effort
from scamvigil.model import EmailScan, LinkScan, MessageScan, Preferences, ProfileScan, ScanResult
from scamvigil.scanner.cache import ResultCache
from scamvigil.scanner.normalize import (
    build_email_result,
    build_link_result,
    build_message_result,
    build_profile_result,
)
from scamvigil.scanner.requests import map_profile_data
from scamvigil.scanner.subjects import extract_email, profile_subject_key, subject_key
from scamvigil.storage import HostStorage
from scamvigil.types import JsonObject, JsonValue
from scamvigil.utils import infer_platform_from_url

logger = logging.getLogger(__name__)


class ScanHandlers:
    """Backend-facing handlers shared by every UI surface."""

    def __init__(
        self,
        *,
        storage: HostStorage,
        auth_gate: AuthGate,
        client: RemoteClient,
        cache: ResultCache,
        notifier: Notifier,
        push_channel: PushChannel,
    ) -> None:
        self._storage = storage
        self._auth_gate = auth_gate
        self._client = client
        self._cache = cache
        self._notifier = notifier
        self._push_channel = push_channel

    async def scan_profile(self, request: ProfileScan, origin: str | None = None) -> ScanResult:
        """Scan a social profile, serving a fresh cached result when available."""
        if not request.profile_url:
            raise MissingInputError("Missing profile URL")

        await self._auth_gate.require()

        key = subject_key(request)
        cached = await self._cache.lookup(key)
        if cached is not None:
            await self._push(origin, cached)
            return cached

        analysis = _expect_object(
            await self._client.action(
                SCAN_PROFILE_PATH,
                {
                    "profileUrl": request.profile_url,
                    "platform": request.platform,
                    "profileData": map_profile_data(request.profile_data),
                },
            ),
            SCAN_PROFILE_PATH,
        )

        profile_name = (request.profile_data or {}).get("name")
        await save_best_effort(
            self._client,
            SAVE_SCAN_RESULT_PATH,
            {
                "profileUrl": request.profile_url,
                "platform": request.platform,
                "profileName": profile_name if isinstance(profile_name, str) and profile_name else None,
                "trustScore": analysis.get("trustScore"),
                # History keeps the backend's own real | suspicious | fake label.
                "riskLevel": analysis.get("riskLevel"),
                "insights": _list(analysis.get("insights")),
                "scamPhrases": _list(analysis.get("scamPhrases")),
            },
        )

        result = build_profile_result(request, analysis, scanned_at=self._cache.now())
        await self._cache.store(key, result)
        await self._push(origin, result)

        if result.risk_level == "high" and (await self.preferences()).notifications_enabled:
            await self._notify(
                "warning",
                HIGH_RISK_PROFILE_TITLE,
                f"Trust Score: {result.score}%. Proceed with caution.",
            )
        return result

    async def scan_link(self, request: LinkScan, origin: str | None = None) -> ScanResult:
        """Evaluate a URL."""
        if not request.url:
            raise MissingInputError("Missing URL")

        await self._auth_gate.require()

        scan = _expect_object(
            await self._client.action(SCAN_LINK_PATH, {"url": request.url, "context": REQUEST_SOURCE}),
            SCAN_LINK_PATH,
        )
        result = build_link_result(request, scan, scanned_at=self._cache.now())

        await save_best_effort(
            self._client,
            SAVE_SECURITY_SCAN_PATH,
            {
                "scanType": "link",
                "input": request.url,
                "score": result.score,
                "riskLevel": result.risk_level,
                "findings": list(result.flags) or [result.narrative or LINK_SCAN_FALLBACK_FINDING],
            },
        )
        await self._push(origin, result)
        return result

    async def scan_email(self, request: EmailScan, origin: str | None = None) -> ScanResult:
        """Verify the sender address found in ``request.email_text``."""
        if not request.email_text.strip():
            raise MissingInputError("Missing email")

        email = extract_email(request.email_text)
        await self._auth_gate.require()

        scan = _expect_object(await self._client.action(VERIFY_EMAIL_PATH, {"email": email}), VERIFY_EMAIL_PATH)
        result = build_email_result(request, scan, scanned_at=self._cache.now())

        recommendation = scan.get("recommendation")
        fallback_finding = recommendation if isinstance(recommendation, str) and recommendation else None
        trust_score = scan.get("trustScore")
        await save_best_effort(
            self._client,
            SAVE_SECURITY_SCAN_PATH,
            {
                "scanType": "email",
                "input": email,
                "score": trust_score if isinstance(trust_score, (int, float)) else 0,
                "riskLevel": result.risk_level,
                "findings": list(result.flags) or [fallback_finding or EMAIL_SCAN_FALLBACK_FINDING],
            },
        )
        await self._push(origin, result)
        return result

    async def scan_message(self, request: MessageScan, origin: str | None = None) -> ScanResult:
        """Scan free text; the backend mutation records the scan itself."""
        if not request.text:
            raise MissingInputError("Missing text")

        await self._auth_gate.require()

        scan = _expect_object(
            await self._client.mutation(SCAN_MESSAGE_PATH, {"messageText": request.text, "source": REQUEST_SOURCE}),
            SCAN_MESSAGE_PATH,
        )
        result = build_message_result(request, scan, scanned_at=self._cache.now())
        await self._push(origin, result)
        return result

    async def get_scan_result(self, profile_url: str) -> ScanResult | None:
        """Cache-only profile lookup; never touches the network or the credential."""
        return await self._cache.lookup(profile_subject_key(profile_url))

    async def add_to_watchlist(self, profile_url: str) -> JsonValue:
        """Register a profile for backend monitoring."""
        if not profile_url:
            raise MissingInputError("Missing profile URL")

        await self._auth_gate.require()

        cached = await self._cache.lookup(profile_subject_key(profile_url))
        initial_trust_score = cached.score if cached is not None else DEFAULT_INITIAL_TRUST_SCORE

        ack = await self._client.mutation(
            ADD_TO_WATCHLIST_PATH,
            {
                "profileUrl": profile_url,
                "platform": infer_platform_from_url(profile_url),
                "checkFrequency": DEFAULT_CHECK_FREQUENCY,
                "initialTrustScore": initial_trust_score,
            },
        )

        if (await self.preferences()).notifications_enabled:
            await self._notify("success", WATCHLIST_ADDED_TITLE, WATCHLIST_ADDED_MESSAGE)
        return ack

    async def preferences(self) -> Preferences:
        """Read user preference flags from the synced scope."""
        return Preferences.from_storage(await self._storage.sync.get())

    async def _push(self, origin: str | None, result: ScanResult) -> None:
        message: JsonObject = {
            "action": PUSH_ACTION_BY_SCAN_TYPE[result.scan_type],
            "result": result.to_payload(),
        }
        await push_best_effort(self._push_channel, origin, message)

    async def _notify(self, kind: str, title: str, message: str) -> None:
        try:
            await self._notifier.notify(build_notification(kind, title, message))  # type: ignore[arg-type]
        except Exception:  # noqa: BLE001
            logger.exception("Failed to show notification: %s", title)


def _expect_object(value: JsonValue, function_path: str) -> JsonObject:
    if not isinstance(value, dict):
        raise BackendError(f"Malformed response from {function_path}", function_path=function_path)
    return value


def _list(value: JsonValue) -> list[JsonValue]:
    return value if isinstance(value, list) else []
