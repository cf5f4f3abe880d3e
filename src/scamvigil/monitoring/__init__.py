"""Background watchlist monitoring."""

from .poller import WatchlistPoller
from .scheduler import build_watchlist_scheduler

__all__ = ["WatchlistPoller", "build_watchlist_scheduler"]
