"""Host integration points: notifications and UI pushes."""

from .notifications import LoggingNotifier, Notifier, build_alert_notification, build_notification
from .push import NullPushChannel, PushChannel, push_best_effort

__all__ = [
    "LoggingNotifier",
    "Notifier",
    "NullPushChannel",
    "PushChannel",
    "build_alert_notification",
    "build_notification",
    "push_best_effort",
]
