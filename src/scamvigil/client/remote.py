"""HTTP client for the backend's query/mutation/action RPC verbs."""

from __future__ import annotations

import logging
from collections.abc import Mapping

import httpx

from scamvigil.constants.backend import (
    API_PATH_PREFIX,
    RESPONSE_FORMAT,
    VERB_ACTION,
    VERB_MUTATION,
    VERB_QUERY,
)
from scamvigil.exceptions import BackendError, NotConfiguredError
from scamvigil.types import JsonValue, RpcVerb

logger = logging.getLogger(__name__)


class RemoteClient:
    """Issues one POST per call to ``<base_url>/api/<verb>``.

    No retries are attempted: ``action`` calls may not be idempotent. With
    ``timeout=None`` a hung request stays pending until the transport gives up.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        auth_token: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = _normalize_base_url(base_url)
        self.auth_token = auth_token
        self.timeout = timeout
        self._transport = transport

    def configure(self, *, base_url: str | None, auth_token: str | None) -> None:
        """Mirror a freshly read credential into this client."""
        self.base_url = _normalize_base_url(base_url)
        self.auth_token = auth_token

    async def query(self, function_path: str, args: Mapping[str, JsonValue] | None = None) -> JsonValue:
        """Run an idempotent read."""
        return await self._call(VERB_QUERY, function_path, args)

    async def mutation(self, function_path: str, args: Mapping[str, JsonValue] | None = None) -> JsonValue:
        """Run a durable write."""
        return await self._call(VERB_MUTATION, function_path, args)

    async def action(self, function_path: str, args: Mapping[str, JsonValue] | None = None) -> JsonValue:
        """Run a side-effecting, possibly non-idempotent call."""
        return await self._call(VERB_ACTION, function_path, args)

    async def _call(
        self,
        verb: RpcVerb,
        function_path: str,
        args: Mapping[str, JsonValue] | None,
    ) -> JsonValue:
        if not self.base_url:
            raise NotConfiguredError()

        headers = {"Content-Type": "application/json"}
        if self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"
        body = {
            "path": function_path,
            "args": _drop_none(args or {}),
            "format": RESPONSE_FORMAT,
        }
        url = f"{self.base_url}{API_PATH_PREFIX}/{verb}"

        logger.debug("Backend %s %s", verb, function_path)
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as http:
                response = await http.post(url, json=body, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise BackendError(
                f"{verb.capitalize()} failed: {exc}",
                function_path=function_path,
            ) from exc

        if not response.is_success:
            raise BackendError(
                f"{verb.capitalize()} failed: {response.reason_phrase or response.status_code}",
                function_path=function_path,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise BackendError(
                f"{verb.capitalize()} failed: malformed JSON response",
                function_path=function_path,
                status_code=response.status_code,
            ) from exc

        if not isinstance(payload, dict):
            raise BackendError(
                f"{verb.capitalize()} failed: response is not a JSON object",
                function_path=function_path,
                status_code=response.status_code,
            )
        if payload.get("status") == "error":
            message = payload.get("errorMessage")
            raise BackendError(
                message if isinstance(message, str) and message else f"{verb.capitalize()} failed",
                function_path=function_path,
                status_code=response.status_code,
            )
        return payload.get("value")


def _normalize_base_url(base_url: str | None) -> str | None:
    if not isinstance(base_url, str):
        return None
    normalized = base_url.strip().rstrip("/")
    return normalized or None


def _drop_none(args: Mapping[str, JsonValue]) -> dict[str, JsonValue]:
    """Omit None-valued arguments, matching how the backend treats absent optionals."""
    return {key: value for key, value in args.items() if value is not None}
