"""Host notifications raised by scans and the watchlist poller."""

from __future__ import annotations

import logging
from typing import Protocol

from scamvigil.constants.notifications import (
    ALERT_DEFAULT_DETAILS,
    ALERT_DEFAULT_EMOJI,
    ALERT_DEFAULT_KIND,
    ALERT_DEFAULT_TITLE,
    ALERT_EMOJI_BY_SEVERITY,
    ALERT_KIND_BY_SEVERITY,
    DEFAULT_PRIORITY,
    HIGH_PRIORITY,
    HIGH_PRIORITY_KINDS,
    NOTIFICATION_ICONS,
)
from scamvigil.model import Notification, WatchlistAlert
from scamvigil.types import NotificationKind

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Shows a notification on the host."""

    async def notify(self, notification: Notification) -> None: ...


def build_notification(kind: NotificationKind, title: str, message: str = "") -> Notification:
    """Prefix the title with the kind's icon and pick a priority."""
    icon = NOTIFICATION_ICONS.get(kind, "")
    return Notification(
        kind=kind,
        title=f"{icon} {title}".strip(),
        message=message,
        priority=HIGH_PRIORITY if kind in HIGH_PRIORITY_KINDS else DEFAULT_PRIORITY,
    )


def build_alert_notification(alert: WatchlistAlert) -> Notification:
    """Map alert severity: critical -> error, high -> warning, otherwise info."""
    kind: NotificationKind = ALERT_KIND_BY_SEVERITY.get(alert.severity, ALERT_DEFAULT_KIND)  # type: ignore[assignment]
    emoji = ALERT_EMOJI_BY_SEVERITY.get(alert.severity, ALERT_DEFAULT_EMOJI)
    return build_notification(
        kind,
        f"{emoji} {alert.title or ALERT_DEFAULT_TITLE}",
        alert.details or ALERT_DEFAULT_DETAILS,
    )


class LoggingNotifier:
    """Notifier for headless hosts: writes notifications to the log."""

    async def notify(self, notification: Notification) -> None:
        level = logging.WARNING if notification.priority >= HIGH_PRIORITY else logging.INFO
        logger.log(level, "%s: %s", notification.title, notification.message)
