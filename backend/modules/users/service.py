"""
User profile and stats service.

Creates profiles on first sign-in and keeps the counters and badges that
the profile screen shows. Stat writes are best-effort: failures are logged
and swallowed so a lost increment never blocks a game from finishing.
"""

from typing import Optional
import logging

from shared.clock import Clock, utc_now
from shared.locks import KeyedLock

from .exceptions import UserNotFoundError
from .interfaces import IUserProfileStore
from .models import (
    BADGE_CATALOGUE,
    AuthProvider,
    Badge,
    BadgeId,
    GameResult,
    User,
)

logger = logging.getLogger(__name__)


def make_badge(badge_id: BadgeId, now) -> Badge:
    definition = BADGE_CATALOGUE[badge_id]
    return Badge(
        id=definition.id.value,
        name=definition.name,
        description=definition.description,
        icon=definition.icon,
        unlocked_at=now,
    )


def earned_badges(user: User) -> list[BadgeId]:
    """
    Badges whose rule the profile now satisfies but has not unlocked yet.

    fast_typer and social_player need per-minute and per-opponent history
    that profiles do not carry, so they are never auto-awarded here.
    """
    progress = {
        BadgeId.WORD_MASTER: user.words_found,
        BadgeId.TOURNAMENT_WINNER: user.tournaments_won,
        BadgeId.STREAK_MASTER: user.win_streak,
    }
    return [
        badge_id
        for badge_id, value in progress.items()
        if value >= BADGE_CATALOGUE[badge_id].target and not user.has_badge(badge_id.value)
    ]


class UserService:
    """
    Profile bookkeeping on top of an IUserProfileStore.

    Shares its per-user lock with LivesService so that life updates and
    stat updates for the same user never interleave.
    """

    def __init__(
        self,
        profiles: IUserProfileStore,
        locks: Optional[KeyedLock] = None,
        clock: Clock = utc_now,
    ):
        self._profiles = profiles
        self._locks = locks or KeyedLock()
        self._clock = clock

    async def get_profile(self, user_id: str) -> User:
        """
        Get a profile.

        Raises:
            UserNotFoundError: If the profile does not exist
        """
        user = await self._profiles.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def ensure_profile(
        self,
        user_id: str,
        email: str = "",
        display_name: Optional[str] = None,
        photo_url: Optional[str] = None,
        provider: AuthProvider = AuthProvider.EMAIL,
    ) -> User:
        """
        Get the profile, creating it with a full life pool on first sign-in.

        Existing profiles only get their identity fields refreshed.
        """
        async with self._locks.hold(user_id):
            existing = await self._profiles.get(user_id)
            if existing is not None:
                changes = {}
                if display_name and display_name != existing.display_name:
                    changes["display_name"] = display_name
                if photo_url and photo_url != existing.photo_url:
                    changes["photo_url"] = photo_url
                if email and email != existing.email:
                    changes["email"] = email
                if not changes:
                    return existing
                return await self._profiles.upsert(user_id, changes)

            now = self._clock()
            logger.info(f"Creating profile for {user_id}")
            return await self._profiles.upsert(
                user_id,
                {
                    "email": email,
                    "display_name": display_name or "Oyuncu",
                    "photo_url": photo_url,
                    "provider": provider,
                    "last_life_regeneration": now,
                    "created_at": now,
                },
            )

    async def record_game_result(self, result: GameResult) -> Optional[User]:
        try:
            async with self._locks.hold(result.user_id):
                user = await self._profiles.get(result.user_id)
                if user is None:
                    logger.warning(f"Skipping stats for unknown user {result.user_id}")
                    return None

                updated = user.model_copy(
                    update={
                        "total_score": user.total_score + result.score,
                        "words_found": user.words_found + result.words_found,
                        "games_won": user.games_won + (1 if result.won else 0),
                        "win_streak": user.win_streak + 1 if result.won else 0,
                    }
                )
                new_badges = earned_badges(updated)
                if result.score >= BADGE_CATALOGUE[BadgeId.HIGH_SCORER].target and not updated.has_badge(
                    BadgeId.HIGH_SCORER.value
                ):
                    new_badges.append(BadgeId.HIGH_SCORER)

                return await self._profiles.upsert(
                    result.user_id,
                    {
                        "total_score": updated.total_score,
                        "words_found": updated.words_found,
                        "games_won": updated.games_won,
                        "win_streak": updated.win_streak,
                        "badges": self._with_badges(updated, new_badges),
                    },
                )
        except Exception:
            logger.exception(f"Failed to record game result for {result.user_id}")
            return None

    async def record_tournament_win(self, user_id: str) -> Optional[User]:
        try:
            async with self._locks.hold(user_id):
                user = await self._profiles.get(user_id)
                if user is None:
                    logger.warning(f"Skipping tournament win for unknown user {user_id}")
                    return None

                updated = user.model_copy(update={"tournaments_won": user.tournaments_won + 1})
                return await self._profiles.upsert(
                    user_id,
                    {
                        "tournaments_won": updated.tournaments_won,
                        "badges": self._with_badges(updated, earned_badges(updated)),
                    },
                )
        except Exception:
            logger.exception(f"Failed to record tournament win for {user_id}")
            return None

    def _with_badges(self, user: User, new_badges: list[BadgeId]) -> list[Badge]:
        if new_badges:
            logger.info(f"User {user.id} unlocked badges: {[b.value for b in new_badges]}")
        now = self._clock()
        return list(user.badges) + [make_badge(badge_id, now) for badge_id in new_badges]
