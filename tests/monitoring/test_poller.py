"""Tests for the watchlist poller."""

from __future__ import annotations

import asyncio
from pathlib import Path

from scamvigil.client import AuthGate, RemoteClient
from scamvigil.constants.backend import GET_MONITORING_ALERTS_PATH
from scamvigil.constants.storage import LAST_NOTIFIED_ALERT_KEY
from scamvigil.monitoring import WatchlistPoller
from scamvigil.storage import HostStorage, JsonFileStorageArea, MemoryStorageArea

ALERTS = [
    {"alertId": "a2", "severity": "critical", "title": "Profile changed name", "details": "Name now matches a bank"},
    {"alertId": "a1", "severity": "high", "title": "Older alert"},
]


class _ReadOnlyArea(MemoryStorageArea):
    async def _write_all(self, items) -> None:
        raise OSError(28, "No space left on device")


class _ExplodingNotifier:
    def __init__(self) -> None:
        self.calls = 0

    async def notify(self, notification) -> None:
        self.calls += 1
        raise RuntimeError("notification host unavailable")


def test_cycle_notifies_newest_alert_once(make_runtime, backend, notifier) -> None:
    backend.respond(GET_MONITORING_ALERTS_PATH, ALERTS)
    runtime = make_runtime()

    async def scenario():
        return await runtime.poller.run_cycle(), await runtime.poller.run_cycle()

    first, second = asyncio.run(scenario())

    assert first is not None and first.alert_id == "a2"
    assert second is None
    assert len(notifier.notifications) == 1
    notification = notifier.notifications[0]
    assert notification.kind == "error"
    assert notification.priority == 2
    assert "Profile changed name" in notification.title
    assert notification.message == "Name now matches a bank"
    assert backend.calls_to(GET_MONITORING_ALERTS_PATH)[0].args == {"unreadOnly": True}
    assert backend.calls[0].verb == "query"


def test_new_alert_after_previous_is_notified(make_runtime, backend, notifier) -> None:
    runtime = make_runtime()

    async def scenario() -> None:
        backend.respond(GET_MONITORING_ALERTS_PATH, ALERTS[1:])
        await runtime.poller.run_cycle()
        backend.respond(GET_MONITORING_ALERTS_PATH, ALERTS)
        await runtime.poller.run_cycle()

    asyncio.run(scenario())

    assert [notification.kind for notification in notifier.notifications] == ["warning", "error"]


def test_disabled_preferences_skip_backend(make_runtime, backend, notifier) -> None:
    backend.respond(GET_MONITORING_ALERTS_PATH, ALERTS)

    for sync in ({"watchlistAlerts": False}, {"notificationsEnabled": False}):
        assert asyncio.run(make_runtime(sync=sync).poller.run_cycle()) is None

    assert backend.calls == []
    assert notifier.notifications == []


def test_not_signed_in_is_silent(make_runtime, backend, notifier) -> None:
    assert asyncio.run(make_runtime(signed_in=False).poller.run_cycle()) is None
    assert backend.calls == []
    assert notifier.notifications == []


def test_backend_failure_is_logged_not_raised(make_runtime, backend, notifier) -> None:
    backend.fail(GET_MONITORING_ALERTS_PATH, 500)

    assert asyncio.run(make_runtime().poller.run_cycle()) is None
    assert notifier.notifications == []


def test_empty_or_unidentified_alerts_are_ignored(make_runtime, backend, notifier) -> None:
    runtime = make_runtime()

    for payload in ([], None, [{"severity": "critical", "title": "no id"}]):
        backend.respond(GET_MONITORING_ALERTS_PATH, payload)
        assert asyncio.run(runtime.poller.run_cycle()) is None

    assert notifier.notifications == []
    assert asyncio.run(runtime.storage.local.get_value(LAST_NOTIFIED_ALERT_KEY)) is None


def test_alert_id_persisted_even_when_notification_fails(make_runtime, backend) -> None:
    backend.respond(GET_MONITORING_ALERTS_PATH, ALERTS)
    runtime = make_runtime()
    exploding = _ExplodingNotifier()
    poller = WatchlistPoller(
        storage=runtime.storage,
        auth_gate=runtime.auth_gate,
        client=runtime.client,
        notifier=exploding,
    )

    async def scenario():
        first = await poller.run_cycle()
        second = await poller.run_cycle()
        stored = await runtime.storage.local.get_value(LAST_NOTIFIED_ALERT_KEY)
        return first, second, stored

    first, second, stored = asyncio.run(scenario())

    assert first is not None
    assert second is None
    assert stored == "a2"
    assert exploding.calls == 1


def _file_backed_poller(tmp_path: Path, backend, notifier) -> WatchlistPoller:
    storage = HostStorage(
        sync=MemoryStorageArea({"authToken": "test-token", "backendUrl": "https://backend.test"}),
        local=JsonFileStorageArea(tmp_path / "local.json"),
    )
    client = RemoteClient(transport=backend.transport)
    return WatchlistPoller(
        storage=storage,
        auth_gate=AuthGate(storage.sync, client),
        client=client,
        notifier=notifier,
    )


def test_dedup_survives_restart(tmp_path: Path, backend, notifier) -> None:
    backend.respond(GET_MONITORING_ALERTS_PATH, ALERTS)

    first = asyncio.run(_file_backed_poller(tmp_path, backend, notifier).run_cycle())
    second = asyncio.run(_file_backed_poller(tmp_path, backend, notifier).run_cycle())

    assert first is not None
    assert second is None
    assert len(notifier.notifications) == 1


def test_unwritable_local_scope_skips_notification(make_runtime, backend, notifier) -> None:
    backend.respond(GET_MONITORING_ALERTS_PATH, ALERTS)
    runtime = make_runtime()
    storage = HostStorage(sync=runtime.storage.sync, local=_ReadOnlyArea())
    poller = WatchlistPoller(storage=storage, auth_gate=runtime.auth_gate, client=runtime.client, notifier=notifier)

    assert asyncio.run(poller.run_cycle()) is None
    assert notifier.notifications == []
