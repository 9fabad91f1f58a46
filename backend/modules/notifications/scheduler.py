"""
In-memory notification scheduler.

Keeps the schedule as a table. A push worker drains due one-shot entries
with pop_due(); recurring entries stay until cancelled. For testing and
single-node deployments.
"""

from datetime import datetime, timedelta
from typing import Optional
import logging
import re

from shared.clock import Clock, utc_now

from .exceptions import InvalidCronSpecError, InvalidDelayError
from .models import NotificationPayload, ScheduledNotification

logger = logging.getLogger(__name__)

_CRON_FIELD = re.compile(r"^(\*|\d+(-\d+)?)(/\d+)?(,(\*|\d+(-\d+)?)(/\d+)?)*$")


def validate_cron_spec(cron_spec: str) -> None:
    """Check that a cron spec has five well-formed fields."""
    fields = cron_spec.split()
    if len(fields) != 5 or not all(_CRON_FIELD.match(f) for f in fields):
        raise InvalidCronSpecError(cron_spec)


class InMemoryNotificationScheduler:
    """Schedule table in a dict keyed by label."""

    def __init__(self, clock: Clock = utc_now):
        self._clock = clock
        self._entries: dict[str, ScheduledNotification] = {}

    async def schedule_one_shot(
        self,
        label: str,
        delay: timedelta,
        payload: NotificationPayload,
    ) -> ScheduledNotification:
        if delay < timedelta(0):
            raise InvalidDelayError(delay.total_seconds())

        now = self._clock()
        entry = ScheduledNotification(
            label=label,
            payload=payload,
            fire_at=now + delay,
            created_at=now,
        )
        self._entries[label] = entry
        logger.debug(f"Scheduled {label} at {entry.fire_at.isoformat()}")
        return entry

    async def schedule_recurring(
        self,
        label: str,
        cron_spec: str,
        payload: NotificationPayload,
    ) -> ScheduledNotification:
        validate_cron_spec(cron_spec)

        entry = ScheduledNotification(
            label=label,
            payload=payload,
            cron_spec=cron_spec,
            created_at=self._clock(),
        )
        self._entries[label] = entry
        logger.debug(f"Scheduled recurring {label} ({cron_spec})")
        return entry

    async def cancel(self, label: str) -> bool:
        removed = self._entries.pop(label, None) is not None
        if removed:
            logger.debug(f"Cancelled {label}")
        return removed

    def get(self, label: str) -> Optional[ScheduledNotification]:
        return self._entries.get(label)

    def pending(self) -> list[ScheduledNotification]:
        return list(self._entries.values())

    def labels_with_prefix(self, prefix: str) -> list[str]:
        return [label for label in self._entries if label.startswith(prefix)]

    def pop_due(self, now: Optional[datetime] = None) -> list[ScheduledNotification]:
        """Remove and return one-shot entries whose fire time has passed."""
        now = now or self._clock()
        due = [
            entry
            for entry in self._entries.values()
            if entry.fire_at is not None and entry.fire_at <= now
        ]
        for entry in due:
            del self._entries[entry.label]
        return sorted(due, key=lambda e: e.fire_at)
