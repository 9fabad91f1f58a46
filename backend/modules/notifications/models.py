"""
Notifications module data models.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from shared.clock import utc_now


class NotificationType(str, Enum):
    """What a notification is about; the client routes taps by this."""

    LIVES_FULL = "lives_full"
    TOURNAMENT_START = "tournament_start"
    GAME_INVITE = "game_invite"
    DAILY_REMINDER = "daily_reminder"
    TEST = "test"


class NotificationChannel(str, Enum):
    """Android notification channels registered by the client."""

    GAME = "game_notifications"
    TOURNAMENT = "tournament_notifications"
    LIVES = "lives_notifications"
    DEFAULT = "default"


class NotificationPayload(BaseModel):
    """Content handed to the push provider."""

    type: NotificationType
    title: str
    body: str
    channel: NotificationChannel = NotificationChannel.DEFAULT
    data: dict[str, Any] = Field(default_factory=dict)
    user_id: Optional[str] = Field(None, description="Recipient")


class ScheduledNotification(BaseModel):
    """An entry in the schedule table."""

    label: str = Field(..., description="Unique schedule name; rescheduling replaces")
    payload: NotificationPayload
    fire_at: Optional[datetime] = Field(None, description="One-shot fire time")
    cron_spec: Optional[str] = Field(None, description="Recurring schedule")
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def recurring(self) -> bool:
        return self.cron_spec is not None
