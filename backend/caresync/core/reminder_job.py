"""
Reminder Job - Polls the care manager for due doses on a fixed interval.
"""

import logging
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from .care_manager import CareManager

logger = logging.getLogger(__name__)

REMINDER_JOB_ID = "dose_reminder_scan"


class ReminderJob:
    """
    Runs CareManager.check_reminders every ``interval_seconds`` on the event loop.
    Must be started from inside a running loop and stopped on shutdown.
    """

    def __init__(self, manager: CareManager, interval_seconds: int = 30):
        self.manager = manager
        self.interval_seconds = interval_seconds
        self._scheduler: Optional[AsyncIOScheduler] = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    async def _scan(self) -> None:
        try:
            await self.manager.check_reminders()
        except Exception as e:
            # Keep the job alive; the next poll retries
            logger.error(f"Reminder scan failed: {e}", exc_info=True)

    def start(self) -> None:
        if self.running:
            return
        self._scheduler = AsyncIOScheduler()
        self._scheduler.add_job(
            self._scan,
            "interval",
            seconds=self.interval_seconds,
            id=REMINDER_JOB_ID,
            max_instances=1,
            coalesce=True,
        )
        self._scheduler.start()
        logger.info(f"Reminder job started (every {self.interval_seconds}s)")

    def stop(self) -> None:
        if self._scheduler is None:
            return
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.info("Reminder job stopped")
