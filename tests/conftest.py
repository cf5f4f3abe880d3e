"""Shared pytest fixtures: fake backend, recording host hooks, and runtime factory."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx
import pytest

from scamvigil.config import VigilConfig
from scamvigil.model import Notification
from scamvigil.runtime import VigilRuntime, build_runtime
from scamvigil.storage import HostStorage

BACKEND_URL = "https://backend.test"
AUTH_TOKEN = "test-token"


@dataclass(frozen=True)
class BackendCall:
    """One recorded RPC call."""

    verb: str
    path: str
    args: dict[str, Any]
    authorization: str | None


@dataclass
class FakeBackend:
    """Backend double served through ``httpx.MockTransport``."""

    responses: dict[str, Any] = field(default_factory=dict)
    failures: dict[str, int] = field(default_factory=dict)
    calls: list[BackendCall] = field(default_factory=list)

    def respond(self, path: str, value: Any) -> None:
        self.responses[path] = value

    def fail(self, path: str, status_code: int = 500) -> None:
        self.failures[path] = status_code

    @property
    def paths(self) -> list[str]:
        return [call.path for call in self.calls]

    def calls_to(self, path: str) -> list[BackendCall]:
        return [call for call in self.calls if call.path == path]

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.calls.append(
            BackendCall(
                verb=request.url.path.rsplit("/", 1)[-1],
                path=body["path"],
                args=body["args"],
                authorization=request.headers.get("Authorization"),
            )
        )
        status_code = self.failures.get(body["path"])
        if status_code is not None:
            return httpx.Response(status_code, json={"status": "error", "errorMessage": "backend failure"})
        return httpx.Response(200, json={"status": "success", "value": self.responses.get(body["path"])})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class RecordingNotifier:
    """Collects notifications instead of showing them."""

    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    async def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)


class RecordingPushChannel:
    """Collects pushes per origin."""

    def __init__(self) -> None:
        self.pushes: list[tuple[str, dict[str, Any]]] = []

    async def push(self, origin: str, message: dict[str, Any]) -> None:
        self.pushes.append((origin, message))


class FakeClock:
    """Settable wall clock in epoch seconds."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def push_channel() -> RecordingPushChannel:
    return RecordingPushChannel()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_runtime(
    tmp_path: Path,
    backend: FakeBackend,
    notifier: RecordingNotifier,
    push_channel: RecordingPushChannel,
    clock: FakeClock,
) -> Callable[..., VigilRuntime]:
    """Return a factory building an in-memory runtime wired to the fake backend."""

    def factory(*, signed_in: bool = True, sync: dict[str, Any] | None = None) -> VigilRuntime:
        sync_items: dict[str, Any] = {"backendUrl": BACKEND_URL}
        if signed_in:
            sync_items["authToken"] = AUTH_TOKEN
        sync_items.update(sync or {})
        return build_runtime(
            VigilConfig(storage_dir=tmp_path),
            storage=HostStorage.in_memory(sync=sync_items),
            notifier=notifier,
            push_channel=push_channel,
            transport=backend.transport,
            clock=clock,
        )

    return factory
