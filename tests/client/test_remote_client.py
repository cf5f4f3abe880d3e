"""Tests for the backend RPC client."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from scamvigil.client import RemoteClient
from scamvigil.exceptions import BackendError, NotConfiguredError


def _client(handler, *, base_url: str | None = "https://backend.test/", token: str | None = "tok") -> RemoteClient:
    return RemoteClient(base_url, auth_token=token, transport=httpx.MockTransport(handler))


def test_call_posts_envelope_and_returns_value() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"status": "success", "value": {"ok": True}})

    client = _client(handler)
    value = asyncio.run(client.action("security.scanLink", {"url": "http://example.test", "unused": None}))

    assert value == {"ok": True}
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "https://backend.test/api/action"
    assert request.headers["Authorization"] == "Bearer tok"
    assert json.loads(request.content) == {
        "path": "security.scanLink",
        "args": {"url": "http://example.test"},
        "format": "json",
    }


@pytest.mark.parametrize("verb", ["query", "mutation", "action"])
def test_each_verb_targets_its_endpoint(verb: str) -> None:
    paths: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        return httpx.Response(200, json={"value": []})

    client = _client(handler)
    asyncio.run(getattr(client, verb)("monitoring.getMonitoringAlerts"))

    assert paths == [f"/api/{verb}"]


def test_no_authorization_header_without_token() -> None:
    headers: list[httpx.Headers] = []

    def handler(request: httpx.Request) -> httpx.Response:
        headers.append(request.headers)
        return httpx.Response(200, json={"value": None})

    asyncio.run(_client(handler, token=None).query("monitoring.getMonitoringAlerts"))

    assert "Authorization" not in headers[0]


def test_unconfigured_base_url_fails_fast() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"value": None})

    with pytest.raises(NotConfiguredError):
        asyncio.run(_client(handler, base_url=None).query("monitoring.getMonitoringAlerts"))
    assert calls == []


def test_non_2xx_raises_backend_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    with pytest.raises(BackendError) as excinfo:
        asyncio.run(_client(handler).mutation("scans.saveScanResult"))

    assert excinfo.value.status_code == 503
    assert excinfo.value.function_path == "scans.saveScanResult"
    assert str(excinfo.value).startswith("Mutation failed")


def test_malformed_json_raises_backend_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>")

    with pytest.raises(BackendError, match="malformed JSON"):
        asyncio.run(_client(handler).query("monitoring.getMonitoringAlerts"))


def test_error_status_envelope_raises_backend_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"status": "error", "errorMessage": "Profile already in watchlist"})

    with pytest.raises(BackendError, match="Profile already in watchlist"):
        asyncio.run(_client(handler).mutation("monitoring.addToWatchlist"))


def test_transport_error_raises_backend_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(BackendError, match="connection refused"):
        asyncio.run(_client(handler).action("scans.scanProfile"))


def test_invalid_base_url_raises_backend_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"value": None})

    with pytest.raises(BackendError) as excinfo:
        asyncio.run(_client(handler, base_url="https://backend.test:notaport").query("monitoring.getMonitoringAlerts"))

    assert excinfo.value.function_path == "monitoring.getMonitoringAlerts"
