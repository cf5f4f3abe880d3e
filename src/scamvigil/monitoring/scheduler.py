"""Recurring timer that drives the watchlist poller.

Usage from an asyncio host:
    scheduler = build_watchlist_scheduler(poller, interval_minutes=15)
    scheduler.start()
"""

from __future__ import annotations

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from scamvigil.constants.config import DEFAULT_POLL_INTERVAL_MINUTES, MIN_POLL_INTERVAL_MINUTES
from scamvigil.constants.notifications import WATCHLIST_JOB_ID
from scamvigil.exceptions import ConfigError
from scamvigil.monitoring.poller import WatchlistPoller

logger = logging.getLogger(__name__)


def build_watchlist_scheduler(
    poller: WatchlistPoller,
    *,
    interval_minutes: int = DEFAULT_POLL_INTERVAL_MINUTES,
    scheduler: AsyncIOScheduler | None = None,
) -> AsyncIOScheduler:
    """Register the single named ``monitorWatchlist`` job on an asyncio scheduler.

    ``max_instances=1`` keeps cycles from overlapping; missed firings are
    coalesced into one.
    """
    if interval_minutes < MIN_POLL_INTERVAL_MINUTES:
        raise ConfigError(f"poll interval must be at least {MIN_POLL_INTERVAL_MINUTES} minute(s)")

    scheduler = scheduler or AsyncIOScheduler()
    scheduler.add_job(
        poller.run_cycle,
        IntervalTrigger(minutes=interval_minutes),
        id=WATCHLIST_JOB_ID,
        name=WATCHLIST_JOB_ID,
        max_instances=1,
        coalesce=True,
        replace_existing=True,
    )
    logger.info("Watchlist polling scheduled every %d minute(s)", interval_minutes)
    return scheduler
