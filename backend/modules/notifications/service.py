"""
Notification service.

Builds the Turkish-language payloads the client expects and hands them to
an INotificationScheduler. Every method is best-effort: a failed schedule
is logged and swallowed, since a missed reminder must never break play.
"""

from datetime import timedelta
from typing import Optional
import logging

from modules.preferences.interfaces import IPreferenceStore
from modules.preferences.keys import notifications_enabled_key, parse_flag

from .interfaces import INotificationScheduler
from .models import (
    NotificationChannel,
    NotificationPayload,
    NotificationType,
)

logger = logging.getLogger(__name__)

DAILY_REMINDER_CRON = "0 19 * * *"


def lives_full_label(user_id: str) -> str:
    return f"{user_id}:lives_full"


def daily_reminder_label(user_id: str) -> str:
    return f"{user_id}:daily_reminder"


def tournament_start_label(user_id: str, tournament_id: str) -> str:
    return f"{user_id}:tournament_start:{tournament_id}"


def game_invite_label(user_id: str, room_id: str) -> str:
    return f"{user_id}:game_invite:{room_id}"


class NotificationService:
    """
    Game notifications on top of a scheduler.

    Args:
        scheduler: Where schedules are written
        preferences: Optional store holding the per-user on/off switch.
            Users who never touched the switch get notifications.
        enabled: Global feature flag (Settings.enable_notifications)
    """

    def __init__(
        self,
        scheduler: INotificationScheduler,
        preferences: Optional[IPreferenceStore] = None,
        enabled: bool = True,
    ):
        self._scheduler = scheduler
        self._preferences = preferences
        self._enabled = enabled

    async def is_enabled_for(self, user_id: str) -> bool:
        if not self._enabled:
            return False
        if self._preferences is None:
            return True
        value = await self._preferences.get(notifications_enabled_key(user_id))
        return parse_flag(value, default=True)

    async def schedule_lives_full(self, user_id: str, time_until_full: timedelta) -> bool:
        """Replace the user's "lives refilled" reminder."""
        payload = NotificationPayload(
            type=NotificationType.LIVES_FULL,
            title="💖 Canların Yenilendi!",
            body="Tüm canların doldu! Oyuna devam edebilirsin.",
            channel=NotificationChannel.LIVES,
            user_id=user_id,
        )
        return await self._one_shot(user_id, lives_full_label(user_id), time_until_full, payload)

    async def cancel_lives_full(self, user_id: str) -> bool:
        return await self._cancel(lives_full_label(user_id))

    async def send_tournament_start(self, user_id: str, tournament_id: str) -> bool:
        payload = NotificationPayload(
            type=NotificationType.TOURNAMENT_START,
            title="🏆 Turnuva Başlıyor!",
            body="Turnuvan başladı! Hemen katıl ve şampiyonluğa oyna.",
            channel=NotificationChannel.TOURNAMENT,
            data={"tournament_id": tournament_id},
            user_id=user_id,
        )
        label = tournament_start_label(user_id, tournament_id)
        return await self._one_shot(user_id, label, timedelta(0), payload)

    async def send_game_invite(self, user_id: str, from_name: str, room_id: str) -> bool:
        payload = NotificationPayload(
            type=NotificationType.GAME_INVITE,
            title="🎮 Oyun Daveti!",
            body=f"{from_name} seni oyuna davet etti!",
            channel=NotificationChannel.GAME,
            data={"room_id": room_id},
            user_id=user_id,
        )
        label = game_invite_label(user_id, room_id)
        return await self._one_shot(user_id, label, timedelta(0), payload)

    async def schedule_daily_reminder(self, user_id: str) -> bool:
        """Remind the user every evening at 19:00."""
        if not await self.is_enabled_for(user_id):
            return False
        payload = NotificationPayload(
            type=NotificationType.DAILY_REMINDER,
            title="📝 Kelime Oyunu Seni Bekliyor!",
            body="Bugün henüz oyun oynamadın. Kelime becerilerini test et!",
            channel=NotificationChannel.GAME,
            user_id=user_id,
        )
        try:
            await self._scheduler.schedule_recurring(
                daily_reminder_label(user_id),
                DAILY_REMINDER_CRON,
                payload,
            )
            return True
        except Exception:
            logger.exception(f"Failed to schedule daily reminder for {user_id}")
            return False

    async def update_settings(self, user_id: str, enabled: bool) -> None:
        """Flip the user's switch and (re)schedule or cancel their reminders."""
        if self._preferences is not None:
            try:
                await self._preferences.set(notifications_enabled_key(user_id), str(enabled).lower())
            except Exception:
                logger.exception(f"Failed to store notification setting for {user_id}")

        if enabled:
            await self.schedule_daily_reminder(user_id)
        else:
            await self._cancel(daily_reminder_label(user_id))
            await self._cancel(lives_full_label(user_id))

    async def _one_shot(
        self,
        user_id: str,
        label: str,
        delay: timedelta,
        payload: NotificationPayload,
    ) -> bool:
        if not await self.is_enabled_for(user_id):
            return False
        try:
            await self._scheduler.schedule_one_shot(label, max(delay, timedelta(0)), payload)
            return True
        except Exception:
            logger.exception(f"Failed to schedule {label}")
            return False

    async def _cancel(self, label: str) -> bool:
        try:
            return await self._scheduler.cancel(label)
        except Exception:
            logger.exception(f"Failed to cancel {label}")
            return False
