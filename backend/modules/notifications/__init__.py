"""
Notifications module.

Decides which push notifications to schedule; delivery is external.

Public API:
- INotificationScheduler: Interface to the scheduling collaborator
- InMemoryNotificationScheduler: Schedule table implementation
- NotificationService: Game notifications (lives, tournaments, invites, reminders)
- NotificationDispatcher: Background drain of due entries to the push provider
"""

from .interfaces import INotificationScheduler
from .models import (
    NotificationChannel,
    NotificationPayload,
    NotificationType,
    ScheduledNotification,
)
from .exceptions import InvalidCronSpecError, InvalidDelayError
from .scheduler import InMemoryNotificationScheduler, validate_cron_spec
from .dispatcher import NotificationDispatcher, log_delivery
from .service import (
    NotificationService,
    DAILY_REMINDER_CRON,
    lives_full_label,
    daily_reminder_label,
    tournament_start_label,
    game_invite_label,
)

__all__ = [
    # Interfaces
    "INotificationScheduler",
    # Models
    "NotificationChannel",
    "NotificationPayload",
    "NotificationType",
    "ScheduledNotification",
    # Exceptions
    "InvalidCronSpecError",
    "InvalidDelayError",
    # Scheduler
    "InMemoryNotificationScheduler",
    "validate_cron_spec",
    # Dispatch
    "NotificationDispatcher",
    "log_delivery",
    # Service
    "NotificationService",
    "DAILY_REMINDER_CRON",
    "lives_full_label",
    "daily_reminder_label",
    "tournament_start_label",
    "game_invite_label",
]
