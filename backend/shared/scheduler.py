"""
Cancellable deadline timers.

Used for the tournament fill deadline and the timed-mode room clock. The
deadline itself is stored on the entity, so a restarted process can re-arm
the timer from the persisted value instead of relying on an in-memory timer
that survived.
"""

from datetime import datetime
from typing import Awaitable, Callable, Optional
import asyncio
import logging

from .clock import Clock, utc_now

logger = logging.getLogger(__name__)

DeadlineCallback = Callable[[], Awaitable[None]]


class DeadlineScheduler:
    """
    Owns one asyncio task per label that sleeps until a deadline and then
    runs a callback.

    Scheduling a label that is already armed replaces the previous timer.
    A cancelled timer never runs its callback. Callback errors are logged,
    not raised, since nothing awaits the timer task.
    """

    def __init__(self, clock: Clock = utc_now) -> None:
        self._clock = clock
        self._tasks: dict[str, asyncio.Task] = {}

    def schedule_at(
        self,
        label: str,
        deadline: datetime,
        callback: DeadlineCallback,
    ) -> None:
        """
        Arm a timer that runs ``callback`` at ``deadline``.

        Deadlines in the past fire on the next loop iteration.

        Args:
            label: Unique timer name, e.g. "tournament-fill:<id>"
            deadline: When the callback should run
            callback: Coroutine function taking no arguments
        """
        self.cancel(label)
        delay = max((deadline - self._clock()).total_seconds(), 0.0)
        loop = asyncio.get_running_loop()
        self._tasks[label] = loop.create_task(
            self._run(label, delay, callback),
            name=label,
        )
        logger.debug("Armed timer %s (%.1fs)", label, delay)

    def cancel(self, label: str) -> bool:
        """
        Cancel a pending timer.

        Returns:
            True if a pending timer was cancelled
        """
        task = self._tasks.pop(label, None)
        if task is None or task.done():
            return False
        task.cancel()
        logger.debug("Cancelled timer %s", label)
        return True

    def is_scheduled(self, label: str) -> bool:
        """Whether a timer with this label is still waiting to fire."""
        task = self._tasks.get(label)
        return task is not None and not task.done()

    @property
    def pending(self) -> list[str]:
        """Labels of timers that have not fired yet."""
        return [label for label, task in self._tasks.items() if not task.done()]

    async def shutdown(self) -> None:
        """Cancel every pending timer and wait for the tasks to finish."""
        tasks = list(self._tasks.values())
        self._tasks.clear()
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _run(
        self,
        label: str,
        delay: float,
        callback: DeadlineCallback,
    ) -> None:
        await asyncio.sleep(delay)

        # Past this point the timer counts as fired; cancel() no longer applies.
        current: Optional[asyncio.Task] = asyncio.current_task()
        if self._tasks.get(label) is current:
            del self._tasks[label]

        try:
            await callback()
        except Exception:
            logger.exception("Timer callback failed for %s", label)
