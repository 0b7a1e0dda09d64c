"""Shortener session.

A session owns one registry, the event log its operations write to, and
the scheduler job that sweeps expired records. Closing the session cancels
the sweep so it never runs against a torn-down registry.
"""

import logging
from typing import Any, Dict, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .config import Settings, settings as default_settings
from .events import EventLog
from .registry import Clock, Registry

logger = logging.getLogger(__name__)

SWEEP_JOB_ID = "sweep_expired_urls"


class ShortenerSession:
    """Registry, event log and periodic sweep with a shared lifetime."""

    def __init__(self, settings: Optional[Settings] = None, clock: Optional[Clock] = None):
        self.settings = settings or default_settings
        self.events = EventLog(max_entries=self.settings.event_log_max_entries)
        self.registry = Registry(sink=self.events, clock=clock, settings=self.settings)
        self.scheduler: Optional[AsyncIOScheduler] = None
        self.closed = False

    @property
    def is_running(self) -> bool:
        return self.scheduler is not None and self.scheduler.running

    async def _sweep_job(self) -> None:
        # Coroutine job: runs on the event loop, never alongside a request.
        if self.closed:
            return
        removed = self.registry.sweep()
        logger.info(f"Scheduled sweep completed: Removed={removed}, Remaining={len(self.registry)}")

    def start(self) -> None:
        """Schedule the periodic sweep.

        Must be called with a running asyncio event loop.
        """
        if self.closed:
            raise RuntimeError("Session is closed")
        if self.is_running:
            logger.warning("Sweep scheduler already running")
            return

        self.scheduler = AsyncIOScheduler()
        self.scheduler.add_job(
            self._sweep_job,
            trigger=IntervalTrigger(seconds=self.settings.sweep_interval_seconds),
            id=SWEEP_JOB_ID,
            name="Sweep Expired URLs",
            replace_existing=True,
            coalesce=True,
            max_instances=1,
        )
        self.scheduler.start()
        logger.info(f"Sweep scheduler started (every {self.settings.sweep_interval_seconds}s)")

    def close(self) -> None:
        """Cancel the periodic sweep. Safe to call more than once."""
        if self.closed:
            return
        self.closed = True
        if self.scheduler is not None:
            if self.scheduler.running:
                self.scheduler.shutdown(wait=False)
            self.scheduler = None
            logger.info("Sweep scheduler shut down")

    def get_status(self) -> Dict[str, Any]:
        """Report the scheduler state and registry size."""
        next_run = None
        if self.is_running:
            job = self.scheduler.get_job(SWEEP_JOB_ID)
            if job is not None and job.next_run_time is not None:
                next_run = job.next_run_time.isoformat()
        return {
            "running": self.is_running,
            "closed": self.closed,
            "records": len(self.registry),
            "events": len(self.events),
            "next_sweep": next_run,
        }

    async def __aenter__(self) -> "ShortenerSession":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()
