"""Single entry point for requests from popup, page scripts, and context menus."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping

from scamvigil.constants.messages import (
    ACTION_ADD_TO_WATCHLIST,
    ACTION_GET_SCAN_RESULT,
    ACTION_PERFORM_SCAN,
    ACTION_SCAN_EMAIL,
    ACTION_SCAN_LINK,
    ACTION_SCAN_MESSAGE,
    INVALID_MESSAGE,
    MENU_SCAN_EMAIL,
    MENU_SCAN_LINK,
    MENU_SCAN_SELECTION,
    UNKNOWN_ERROR_MESSAGE,
)
from scamvigil.exceptions import MissingInputError, UnknownActionError, VigilError
from scamvigil.model import EmailScan, LinkScan, MessageScan, ProfileScan, ScanResult
from scamvigil.scanner.handlers import ScanHandlers
from scamvigil.scanner.requests import parse_profile_url, parse_scan_request, validate_message
from scamvigil.types import JsonObject, JsonValue

logger = logging.getLogger(__name__)

type Handler = Callable[[Mapping[str, JsonValue], str | None], Awaitable[ScanResult | JsonValue | None]]


class RequestRouter:
    """Dispatches tagged request messages and always returns an envelope.

    ``handle`` never raises: every failure becomes
    ``{"success": False, "error": <message>}`` so each request resolves
    exactly once.
    """

    def __init__(self, handlers: ScanHandlers) -> None:
        self._handlers = handlers
        self._dispatch: dict[str, Handler] = {
            ACTION_PERFORM_SCAN: self._perform_scan,
            ACTION_SCAN_LINK: self._scan_link,
            ACTION_SCAN_EMAIL: self._scan_email,
            ACTION_SCAN_MESSAGE: self._scan_message,
            ACTION_GET_SCAN_RESULT: self._get_scan_result,
            ACTION_ADD_TO_WATCHLIST: self._add_to_watchlist,
        }

    @property
    def actions(self) -> tuple[str, ...]:
        """Action tags this router accepts."""
        return tuple(self._dispatch)

    async def handle(self, message: object, origin: str | None = None) -> JsonObject:
        """Route ``message`` and wrap the outcome in a success/error envelope."""
        try:
            result = await self._route(message, origin)
        except VigilError as exc:
            logger.info("Request failed: %s", exc)
            return {"success": False, "error": str(exc)}
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected failure while handling request")
            return {"success": False, "error": str(exc) or UNKNOWN_ERROR_MESSAGE}

        if isinstance(result, ScanResult):
            return {"success": True, "result": result.to_payload()}
        return {"success": True, "result": result}

    async def handle_context_menu(
        self,
        menu_item_id: str,
        info: Mapping[str, JsonValue],
        origin: str | None = None,
    ) -> ScanResult | None:
        """Run the scan bound to a context-menu item; failures are logged, not raised."""
        link = info.get("linkUrl")
        link_url = link if isinstance(link, str) else ""
        selection = info.get("selectionText")
        selection_text = selection if isinstance(selection, str) else ""
        try:
            if menu_item_id == MENU_SCAN_LINK:
                return await self._handlers.scan_link(LinkScan(url=link_url), origin)
            if menu_item_id == MENU_SCAN_SELECTION:
                return await self._handlers.scan_message(MessageScan(text=selection_text), origin)
            if menu_item_id == MENU_SCAN_EMAIL:
                return await self._handlers.scan_email(EmailScan(email_text=selection_text), origin)
        except Exception:  # noqa: BLE001
            logger.exception("Context menu action %s failed", menu_item_id)
            return None

        logger.debug("Ignoring unknown context menu item %s", menu_item_id)
        return None

    async def _route(self, message: object, origin: str | None) -> ScanResult | JsonValue | None:
        if not isinstance(message, Mapping):
            raise MissingInputError(INVALID_MESSAGE)
        action = message.get("action")
        if not action:
            raise MissingInputError(INVALID_MESSAGE)

        handler = self._dispatch.get(action) if isinstance(action, str) else None
        if handler is None:
            raise UnknownActionError(action)

        validate_message(action, message)
        return await handler(message, origin)

    async def _perform_scan(self, message: Mapping[str, JsonValue], origin: str | None) -> ScanResult:
        request = parse_scan_request(ACTION_PERFORM_SCAN, message)
        assert isinstance(request, ProfileScan)
        return await self._handlers.scan_profile(request, origin)

    async def _scan_link(self, message: Mapping[str, JsonValue], origin: str | None) -> ScanResult:
        request = parse_scan_request(ACTION_SCAN_LINK, message)
        assert isinstance(request, LinkScan)
        return await self._handlers.scan_link(request, origin)

    async def _scan_email(self, message: Mapping[str, JsonValue], origin: str | None) -> ScanResult:
        request = parse_scan_request(ACTION_SCAN_EMAIL, message)
        assert isinstance(request, EmailScan)
        return await self._handlers.scan_email(request, origin)

    async def _scan_message(self, message: Mapping[str, JsonValue], origin: str | None) -> ScanResult:
        request = parse_scan_request(ACTION_SCAN_MESSAGE, message)
        assert isinstance(request, MessageScan)
        return await self._handlers.scan_message(request, origin)

    async def _get_scan_result(self, message: Mapping[str, JsonValue], origin: str | None) -> ScanResult | None:
        return await self._handlers.get_scan_result(parse_profile_url(message))

    async def _add_to_watchlist(self, message: Mapping[str, JsonValue], origin: str | None) -> JsonValue:
        return await self._handlers.add_to_watchlist(parse_profile_url(message))
