"""
Notification scheduler interface.

Push delivery is external. The game engine only decides what to send and
when, through this protocol.
"""

from datetime import timedelta
from typing import Protocol, runtime_checkable

from .models import NotificationPayload, ScheduledNotification


@runtime_checkable
class INotificationScheduler(Protocol):
    """Interface for scheduling push notifications."""

    async def schedule_one_shot(
        self,
        label: str,
        delay: timedelta,
        payload: NotificationPayload,
    ) -> ScheduledNotification:
        """
        Schedule a notification to fire once after ``delay``.

        An existing schedule with the same label is replaced.

        Raises:
            InvalidDelayError: If delay is negative
        """
        ...

    async def schedule_recurring(
        self,
        label: str,
        cron_spec: str,
        payload: NotificationPayload,
    ) -> ScheduledNotification:
        """
        Schedule a notification on a cron schedule (minute hour dom month dow).

        Raises:
            InvalidCronSpecError: If cron_spec is malformed
        """
        ...

    async def cancel(self, label: str) -> bool:
        """
        Cancel a schedule.

        Returns:
            True if a schedule with this label existed
        """
        ...
