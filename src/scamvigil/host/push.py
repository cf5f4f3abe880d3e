"""Fire-and-forget pushes back to the UI context that issued a request."""

from __future__ import annotations

import logging
from typing import Protocol

from scamvigil.types import JsonObject

logger = logging.getLogger(__name__)


class PushChannel(Protocol):
    """Delivers a message to a UI context; raises if the context is gone."""

    async def push(self, origin: str, message: JsonObject) -> None: ...


class NullPushChannel:
    """Push channel for hosts without addressable UI contexts."""

    async def push(self, origin: str, message: JsonObject) -> None:
        logger.debug("Dropping push %s for %s", message.get("action"), origin)


async def push_best_effort(channel: PushChannel, origin: str | None, message: JsonObject) -> None:
    """Push when an origin is known; delivery failures are logged only."""
    if not origin:
        return
    try:
        await channel.push(origin, message)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Push %s to %s failed: %s", message.get("action"), origin, exc)
