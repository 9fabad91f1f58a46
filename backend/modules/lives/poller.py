"""
Background life regeneration.

Re-runs LivesService.refresh for active users on a fixed period so that
their stored pool catches up without waiting for their next request.
A user counts as active until they have not been seen for ``idle_after``.
"""

from datetime import datetime, timedelta
from typing import Optional
import asyncio
import logging

from shared.clock import Clock, utc_now
from modules.users.exceptions import UserNotFoundError

from .interfaces import ILivesService

logger = logging.getLogger(__name__)

DEFAULT_IDLE_AFTER = timedelta(minutes=30)


class LifeRegenerationPoller:
    """Periodic refresh of recently seen users, run as one asyncio task."""

    def __init__(
        self,
        lives: ILivesService,
        interval_seconds: float = 60,
        idle_after: timedelta = DEFAULT_IDLE_AFTER,
        clock: Clock = utc_now,
    ):
        self._lives = lives
        self._interval = interval_seconds
        self._idle_after = idle_after
        self._clock = clock
        self._last_seen: dict[str, datetime] = {}
        self._task: Optional[asyncio.Task] = None

    def track(self, user_id: str) -> None:
        """Mark the user as seen now."""
        self._last_seen[user_id] = self._clock()

    def untrack(self, user_id: str) -> None:
        self._last_seen.pop(user_id, None)

    @property
    def tracked(self) -> frozenset[str]:
        return frozenset(self._last_seen)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def expire_idle(self) -> int:
        """Forget users not seen within the idle window; returns how many."""
        cutoff = self._clock() - self._idle_after
        idle = [user_id for user_id, seen in self._last_seen.items() if seen < cutoff]
        for user_id in idle:
            del self._last_seen[user_id]
        if idle:
            logger.debug(f"Stopped polling {len(idle)} idle users")
        return len(idle)

    async def run_once(self) -> int:
        """Refresh every active user once; returns how many succeeded."""
        self.expire_idle()
        refreshed = 0
        for user_id in list(self._last_seen):
            try:
                await self._lives.refresh(user_id)
                refreshed += 1
            except UserNotFoundError:
                logger.warning(f"Dropping unknown user {user_id} from life polling")
                self.untrack(user_id)
            except Exception:
                logger.exception(f"Life refresh failed for {user_id}")
        return refreshed

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._loop())
        logger.info(f"Life regeneration poller started ({self._interval}s)")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Life regeneration poller stopped")

    async def _loop(self) -> None:
        while True:
            await self.run_once()
            await asyncio.sleep(self._interval)
