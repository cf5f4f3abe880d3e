"""Best-effort persistence of scan results to backend history."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from scamvigil.client.remote import RemoteClient
from scamvigil.exceptions import PersistenceWarning, VigilError
from scamvigil.types import JsonValue

logger = logging.getLogger(__name__)


async def save_best_effort(client: RemoteClient, function_path: str, args: Mapping[str, JsonValue]) -> bool:
    """Persist via ``function_path``; failures are logged and reported as False."""
    try:
        await client.mutation(function_path, args)
    except VigilError as exc:
        logger.warning("%s", PersistenceWarning(function_path, exc))
        return False
    return True
