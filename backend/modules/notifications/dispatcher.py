"""
Push dispatch worker.

Drains due one-shot entries from the schedule table on a fixed period and
hands each one to a delivery callback. Without a push provider configured
the callback only logs, so fired entries still leave the table.
"""

from typing import Awaitable, Callable, Optional
import asyncio
import logging

from .models import ScheduledNotification
from .scheduler import InMemoryNotificationScheduler

logger = logging.getLogger(__name__)

Deliver = Callable[[ScheduledNotification], Awaitable[None]]


async def log_delivery(entry: ScheduledNotification) -> None:
    payload = entry.payload
    logger.info(f"Push {payload.type.value} to {payload.user_id}: {payload.title}")


class NotificationDispatcher:
    """Periodic pop_due() drain, run as one asyncio task."""

    def __init__(
        self,
        scheduler: InMemoryNotificationScheduler,
        deliver: Optional[Deliver] = None,
        interval_seconds: float = 5,
    ):
        self._scheduler = scheduler
        self._deliver = deliver or log_delivery
        self._interval = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> int:
        """Deliver everything due; returns how many entries were drained."""
        due = self._scheduler.pop_due()
        for entry in due:
            try:
                await self._deliver(entry)
            except Exception:
                logger.exception(f"Delivery failed for {entry.label}")
        return len(due)

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._loop())
        logger.info(f"Notification dispatcher started ({self._interval}s)")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Notification dispatcher stopped")

    async def _loop(self) -> None:
        while True:
            await self.run_once()
            await asyncio.sleep(self._interval)
