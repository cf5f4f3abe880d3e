"""Watchlist alert polling with at-most-once notification per alert."""

from __future__ import annotations

import logging

from scamvigil.client import AuthGate, RemoteClient
from scamvigil.constants.backend import GET_MONITORING_ALERTS_PATH
from scamvigil.constants.storage import LAST_NOTIFIED_ALERT_KEY
from scamvigil.exceptions import VigilError
from scamvigil.host import Notifier, build_alert_notification
from scamvigil.model import Preferences, WatchlistAlert
from scamvigil.storage import HostStorage

logger = logging.getLogger(__name__)


class WatchlistPoller:
    """One polling cycle per scheduler firing.

    The newest unread alert is compared with ``lastNotifiedAlertId``; a new id
    is persisted before the notification is raised, so an interrupted cycle
    can drop a notification but never repeat one.
    """

    def __init__(
        self,
        *,
        storage: HostStorage,
        auth_gate: AuthGate,
        client: RemoteClient,
        notifier: Notifier,
    ) -> None:
        self._storage = storage
        self._auth_gate = auth_gate
        self._client = client
        self._notifier = notifier

    async def run_cycle(self) -> WatchlistAlert | None:
        """Run one cycle; returns the alert notified about, if any. Never raises."""
        preferences = Preferences.from_storage(await self._storage.sync.get())
        if not preferences.watchlist_alerts or not preferences.notifications_enabled:
            logger.debug("Watchlist alerts disabled by preferences; skipping cycle")
            return None

        try:
            await self._auth_gate.require()
            raw_alerts = await self._client.query(GET_MONITORING_ALERTS_PATH, {"unreadOnly": True})
        except VigilError as exc:
            logger.warning("Watchlist check failed: %s", exc)
            return None

        if not isinstance(raw_alerts, list) or not raw_alerts:
            logger.debug("No unread watchlist alerts")
            return None

        # Backend returns alerts newest first.
        newest = WatchlistAlert.from_payload(raw_alerts[0])
        if newest is None:
            logger.debug("Newest watchlist alert has no alertId; skipping")
            return None

        try:
            previous = await self._storage.local.swap(LAST_NOTIFIED_ALERT_KEY, newest.alert_id)
        except OSError as exc:
            logger.warning("Could not record watchlist alert %s; skipping notification: %s", newest.alert_id, exc)
            return None
        if previous == newest.alert_id:
            logger.debug("Watchlist alert %s already notified", newest.alert_id)
            return None

        try:
            await self._notifier.notify(build_alert_notification(newest))
        except Exception:  # noqa: BLE001
            logger.exception("Failed to show watchlist notification for alert %s", newest.alert_id)
        return newest
