"""
Lives service.

Wraps the pure ledger with persistence: every operation loads the profile,
applies regeneration for the current time, changes it and writes the
changed fields back, all under the user's lock. Notification and counter
bookkeeping is best-effort.
"""

from datetime import date, timedelta
from typing import Optional
import logging

from shared.clock import Clock, utc_now
from shared.locks import KeyedLock
from modules.notifications.service import NotificationService
from modules.preferences.interfaces import IPreferenceStore
from modules.preferences.keys import ad_rewards_key, daily_plays_key, parse_counter
from modules.users.exceptions import UserNotFoundError
from modules.users.interfaces import IUserProfileStore
from modules.users.models import User

from . import ledger
from .exceptions import InvalidPremiumDurationError
from .models import (
    DAILY_PLAY_LIMIT,
    LIFE_REGENERATION_INTERVAL,
    MAX_LIVES,
    DailyLimit,
    LifeSource,
    LivesStatus,
    PlayPermission,
)

logger = logging.getLogger(__name__)


class LivesService:
    """
    Life pool operations for one process.

    Args:
        profiles: Profile store holding lives and the regeneration anchor
        preferences: Key-value store for the ad tally and daily counters
        notifications: Schedules the "lives refilled" reminder
        locks: Per-user lock, shared with UserService
        clock: Time source
    """

    def __init__(
        self,
        profiles: IUserProfileStore,
        preferences: Optional[IPreferenceStore] = None,
        notifications: Optional[NotificationService] = None,
        locks: Optional[KeyedLock] = None,
        clock: Clock = utc_now,
        max_lives: int = MAX_LIVES,
        regeneration_interval: timedelta = LIFE_REGENERATION_INTERVAL,
        daily_limit: int = DAILY_PLAY_LIMIT,
    ):
        self._profiles = profiles
        self._preferences = preferences
        self._notifications = notifications
        self._locks = locks or KeyedLock()
        self._clock = clock
        self._max_lives = max_lives
        self._interval = regeneration_interval
        self._daily_limit = daily_limit

    @property
    def max_lives(self) -> int:
        return self._max_lives

    async def refresh(self, user_id: str) -> User:
        async with self._locks.hold(user_id):
            return await self._refresh_locked(user_id)

    async def get_status(self, user_id: str) -> LivesStatus:
        user = await self.refresh(user_id)
        now = self._clock()
        return LivesStatus(
            user_id=user_id,
            lives=user.lives,
            max_lives=self._max_lives,
            is_premium=user.is_premium(now),
            premium_until=user.premium_until,
            next_life_in_seconds=int(self._next_life(user, now).total_seconds()),
            full_in_seconds=int(
                ledger.time_until_full(user, now, self._max_lives, self._interval).total_seconds()
            ),
            ad_rewards=await self.get_ad_rewards(user_id),
        )

    async def can_play(self, user_id: str) -> PlayPermission:
        user = await self.refresh(user_id)
        return ledger.can_play(user, self._clock(), self._max_lives, self._interval)

    async def consume_for_game(self, user_id: str) -> PlayPermission:
        """
        Spend a life for a game that is starting.

        Premium users keep their lives. Every allowed start counts towards
        the daily limit.
        """
        async with self._locks.hold(user_id):
            user = await self._refresh_locked(user_id)
            now = self._clock()
            permission = ledger.can_play(user, now, self._max_lives, self._interval)
            if not permission.allowed:
                logger.info(f"User {user_id} cannot play: no lives left")
                return permission

            if not permission.is_premium:
                consumed = ledger.consume(user, now, self._max_lives)
                user = await self._profiles.upsert(
                    user_id,
                    {
                        "lives": consumed.lives,
                        "last_life_regeneration": consumed.last_life_regeneration,
                    },
                )
                logger.debug(f"User {user_id} spent a life, {user.lives} left")
                await self._sync_lives_full(user, now)

        await self._record_play(user_id, now.date())
        return permission.model_copy(update={"lives": user.lives})

    async def refund_game(self, user_id: str, permission: PlayPermission) -> None:
        """
        Give back what consume_for_game took for a game that never started.

        ``permission`` is the value consume_for_game returned. Refused and
        premium starts spent no life, so only the play counter moves back.
        """
        if not permission.allowed:
            return
        if not permission.is_premium:
            await self.add_life(user_id, LifeSource.REFUND)
        await self._record_play(user_id, self._clock().date(), delta=-1)

    async def add_life(self, user_id: str, source: LifeSource) -> User:
        async with self._locks.hold(user_id):
            user = await self._refresh_locked(user_id)
            granted = ledger.add_life(user, source, self._max_lives)
            if granted.lives == user.lives:
                logger.debug(f"User {user_id} already has full lives, {source.value} life not added")
                return user

            user = await self._profiles.upsert(user_id, {"lives": granted.lives})
            logger.info(f"User {user_id} got a life from {source.value}, now {user.lives}")
            await self._sync_lives_full(user, self._clock())
            return user

    async def reward_ad(self, user_id: str) -> User:
        """Grant the life for a watched rewarded ad and bump the tally."""
        user = await self.add_life(user_id, LifeSource.AD)
        if self._preferences is not None:
            try:
                key = ad_rewards_key(user_id)
                count = parse_counter(await self._preferences.get(key))
                await self._preferences.set(key, str(count + 1))
            except Exception:
                logger.exception(f"Failed to update ad reward tally for {user_id}")
        return user

    async def get_ad_rewards(self, user_id: str) -> int:
        if self._preferences is None:
            return 0
        return parse_counter(await self._preferences.get(ad_rewards_key(user_id)))

    async def clear_ad_rewards(self, user_id: str) -> None:
        if self._preferences is not None:
            await self._preferences.remove(ad_rewards_key(user_id))

    async def grant_premium(self, user_id: str, days: int) -> User:
        """
        Extend the premium window by ``days``.

        Extends from the current expiry when it is still in the future,
        otherwise from now.

        Raises:
            InvalidPremiumDurationError: If days is not positive
        """
        if days <= 0:
            raise InvalidPremiumDurationError(days)

        async with self._locks.hold(user_id):
            user = await self._load(user_id)
            now = self._clock()
            start = user.premium_until if user.is_premium(now) else now
            premium_until = start + timedelta(days=days)
            logger.info(f"User {user_id} premium until {premium_until.isoformat()}")
            return await self._profiles.upsert(user_id, {"premium_until": premium_until})

    async def check_daily_limit(self, user_id: str, today: Optional[date] = None) -> DailyLimit:
        today = today or self._clock().date()
        played = 0
        if self._preferences is not None:
            played = parse_counter(await self._preferences.get(daily_plays_key(user_id, today)))
        return DailyLimit(
            within_limit=played < self._daily_limit,
            played=played,
            max=self._daily_limit,
        )

    async def _load(self, user_id: str) -> User:
        user = await self._profiles.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def _refresh_locked(self, user_id: str) -> User:
        user = await self._load(user_id)
        regenerated = ledger.regenerate(user, self._clock(), self._max_lives, self._interval)
        if (
            regenerated.lives == user.lives
            and regenerated.last_life_regeneration == user.last_life_regeneration
        ):
            return user

        logger.debug(f"User {user_id} regenerated {regenerated.lives - user.lives} lives")
        updated = await self._profiles.upsert(
            user_id,
            {
                "lives": regenerated.lives,
                "last_life_regeneration": regenerated.last_life_regeneration,
            },
        )
        if updated.lives >= self._max_lives and self._notifications is not None:
            await self._notifications.cancel_lives_full(user_id)
        return updated

    def _next_life(self, user: User, now) -> timedelta:
        return ledger.time_until_next_life(user, now, self._max_lives, self._interval)

    async def _sync_lives_full(self, user: User, now) -> None:
        if self._notifications is None:
            return
        if user.lives >= self._max_lives:
            await self._notifications.cancel_lives_full(user.id)
        else:
            full_in = ledger.time_until_full(user, now, self._max_lives, self._interval)
            await self._notifications.schedule_lives_full(user.id, full_in)

    async def _record_play(self, user_id: str, today: date, delta: int = 1) -> None:
        if self._preferences is None:
            return
        try:
            key = daily_plays_key(user_id, today)
            played = parse_counter(await self._preferences.get(key))
            await self._preferences.set(key, str(max(played + delta, 0)))
        except Exception:
            logger.exception(f"Failed to record daily play for {user_id}")
