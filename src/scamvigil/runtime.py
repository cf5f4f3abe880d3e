"""Wire storage, client, cache, handlers, router, and poller from one config."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

import httpx

from scamvigil.client import AuthGate, RemoteClient
from scamvigil.config import VigilConfig
from scamvigil.host import LoggingNotifier, Notifier, NullPushChannel, PushChannel
from scamvigil.monitoring import WatchlistPoller
from scamvigil.scanner import RequestRouter, ResultCache, ScanHandlers
from scamvigil.storage import HostStorage


@dataclass(frozen=True)
class VigilRuntime:
    """Fully wired components sharing one storage pair and one client."""

    config: VigilConfig
    storage: HostStorage
    client: RemoteClient
    auth_gate: AuthGate
    cache: ResultCache
    handlers: ScanHandlers
    router: RequestRouter
    poller: WatchlistPoller


def build_runtime(
    config: VigilConfig,
    *,
    storage: HostStorage | None = None,
    notifier: Notifier | None = None,
    push_channel: PushChannel | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    clock: Callable[[], float] = time.time,
) -> VigilRuntime:
    """Build a runtime; storage defaults to JSON files under ``config.storage_dir``."""
    storage = storage or HostStorage.from_directory(config.storage_dir)
    notifier = notifier or LoggingNotifier()
    client = RemoteClient(config.backend_url, timeout=config.request_timeout_seconds, transport=transport)
    auth_gate = AuthGate(storage.sync, client, default_backend_url=config.backend_url)
    cache = ResultCache(storage.local, ttl_seconds=config.cache_ttl_seconds, clock=clock)
    handlers = ScanHandlers(
        storage=storage,
        auth_gate=auth_gate,
        client=client,
        cache=cache,
        notifier=notifier,
        push_channel=push_channel or NullPushChannel(),
    )
    return VigilRuntime(
        config=config,
        storage=storage,
        client=client,
        auth_gate=auth_gate,
        cache=cache,
        handlers=handlers,
        router=RequestRouter(handlers),
        poller=WatchlistPoller(storage=storage, auth_gate=auth_gate, client=client, notifier=notifier),
    )
