"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Stores are picked by Settings.storage_backend: in-memory for tests and
single-node development, Supabase tables for production.
"""

from datetime import timedelta
from typing import TYPE_CHECKING, Optional

from fastapi import Depends, HTTPException, status

from api.middleware.auth import get_current_user
from modules.lives.models import DAILY_LIMIT_REASON
from modules.lives.service import LivesService
from modules.users.models import AuthProvider, User
from shared.config import Settings, get_settings
from shared.models import AuthenticatedUser

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.lives.poller import LifeRegenerationPoller
    from modules.notifications.dispatcher import NotificationDispatcher
    from modules.notifications.scheduler import InMemoryNotificationScheduler
    from modules.notifications.service import NotificationService
    from modules.preferences.interfaces import IPreferenceStore
    from modules.rooms.interfaces import IRoomService
    from modules.tournaments.interfaces import ITournamentService
    from modules.users.interfaces import IUserProfileStore
    from modules.users.service import UserService
    from modules.words.interfaces import IWordScorer
    from shared.locks import KeyedLock
    from shared.scheduler import DeadlineScheduler


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings
        self._user_locks: "KeyedLock | None" = None
        self._timers: "DeadlineScheduler | None" = None
        self._preferences: "IPreferenceStore | None" = None
        self._notification_scheduler: "InMemoryNotificationScheduler | None" = None
        self._notification_service: "NotificationService | None" = None
        self._notification_dispatcher: "NotificationDispatcher | None" = None
        self._profiles: "IUserProfileStore | None" = None
        self._user_service: "UserService | None" = None
        self._lives_service: Optional[LivesService] = None
        self._lives_poller: "LifeRegenerationPoller | None" = None
        self._scorer: "IWordScorer | None" = None
        self._room_service: "IRoomService | None" = None
        self._tournament_service: "ITournamentService | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def use_supabase(self) -> bool:
        return self.settings.storage_backend == "supabase"

    @property
    def user_locks(self) -> "KeyedLock":
        """Per-user lock shared by lives and stats updates."""
        if self._user_locks is None:
            from shared.locks import KeyedLock
            self._user_locks = KeyedLock()
        return self._user_locks

    @property
    def timers(self) -> "DeadlineScheduler":
        """Fill deadlines and timed-room clocks."""
        if self._timers is None:
            from shared.scheduler import DeadlineScheduler
            self._timers = DeadlineScheduler()
        return self._timers

    @property
    def preferences(self) -> "IPreferenceStore":
        if self._preferences is None:
            from modules.preferences.store import InMemoryPreferenceStore
            self._preferences = InMemoryPreferenceStore()
        return self._preferences

    @property
    def notification_scheduler(self) -> "InMemoryNotificationScheduler":
        """Schedule table drained by the push worker."""
        if self._notification_scheduler is None:
            from modules.notifications.scheduler import InMemoryNotificationScheduler
            self._notification_scheduler = InMemoryNotificationScheduler()
        return self._notification_scheduler

    @property
    def notifications(self) -> "NotificationService":
        if self._notification_service is None:
            from modules.notifications.service import NotificationService
            self._notification_service = NotificationService(
                self.notification_scheduler,
                preferences=self.preferences,
                enabled=self.settings.enable_notifications,
            )
        return self._notification_service

    @property
    def notification_dispatcher(self) -> "NotificationDispatcher":
        if self._notification_dispatcher is None:
            from modules.notifications.dispatcher import NotificationDispatcher
            self._notification_dispatcher = NotificationDispatcher(
                self.notification_scheduler,
                interval_seconds=self.settings.notification_dispatch_seconds,
            )
        return self._notification_dispatcher

    @property
    def profiles(self) -> "IUserProfileStore":
        if self._profiles is None:
            if self.use_supabase:
                from modules.users.repository import SupabaseUserProfileStore
                from shared.database import get_supabase_client
                self._profiles = SupabaseUserProfileStore(get_supabase_client())
            else:
                from modules.users.store import InMemoryUserProfileStore
                self._profiles = InMemoryUserProfileStore()
        return self._profiles

    @property
    def users(self) -> "UserService":
        if self._user_service is None:
            from modules.users.service import UserService
            self._user_service = UserService(self.profiles, locks=self.user_locks)
        return self._user_service

    @property
    def lives(self) -> LivesService:
        if self._lives_service is None:
            self._lives_service = LivesService(
                self.profiles,
                preferences=self.preferences,
                notifications=self.notifications,
                locks=self.user_locks,
                max_lives=self.settings.max_lives,
                regeneration_interval=timedelta(minutes=self.settings.life_regeneration_minutes),
                daily_limit=self.settings.daily_play_limit,
            )
        return self._lives_service

    @property
    def lives_poller(self) -> "LifeRegenerationPoller":
        if self._lives_poller is None:
            from modules.lives.poller import LifeRegenerationPoller
            self._lives_poller = LifeRegenerationPoller(
                self.lives,
                interval_seconds=self.settings.lives_poll_seconds,
                idle_after=timedelta(minutes=self.settings.lives_poll_idle_minutes),
            )
        return self._lives_poller

    @property
    def scorer(self) -> "IWordScorer":
        if self._scorer is None:
            from modules.words.lexicon import load_default_lexicon
            from modules.words.scorer import WordScorer
            self._scorer = WordScorer(load_default_lexicon(self.settings.lexicon_path))
        return self._scorer

    @property
    def rooms(self) -> "IRoomService":
        if self._room_service is None:
            from modules.rooms.models import GameRoom
            from modules.rooms.service import RoomService
            from modules.words.board import BoardGenerator

            if self.use_supabase:
                from modules.rooms.repository import RoomRepository
                from shared.database import get_supabase_client
                store = RoomRepository(get_supabase_client())
            else:
                from shared.store import InMemoryDocumentStore
                store = InMemoryDocumentStore(GameRoom, "game_rooms")

            self._room_service = RoomService(
                store,
                self.scorer,
                BoardGenerator(vowel_probability=self.settings.vowel_probability),
                profiles=self.profiles,
                lives=self.lives,
                stats=self.users,
                timers=self.timers,
                notifications=self.notifications,
                default_target_score=self.settings.default_target_score,
                default_time_limit=self.settings.default_time_limit,
            )
        return self._room_service

    @property
    def tournaments(self) -> "ITournamentService":
        if self._tournament_service is None:
            from modules.tournaments.models import Tournament
            from modules.tournaments.service import TournamentService

            if self.use_supabase:
                from modules.tournaments.repository import TournamentRepository
                from shared.database import get_supabase_client
                store = TournamentRepository(get_supabase_client())
            else:
                from shared.store import InMemoryDocumentStore
                store = InMemoryDocumentStore(Tournament, "tournaments")

            self._tournament_service = TournamentService(
                store,
                self.timers,
                profiles=self.profiles,
                notifications=self.notifications,
                stats=self.users,
                size=self.settings.tournament_size,
                fill_delay=timedelta(seconds=self.settings.tournament_fill_seconds),
            )
        return self._tournament_service

    async def startup(self) -> None:
        """Re-arm durable timers and start background work."""
        await self.tournaments.resume_pending()
        await self.rooms.resume_pending()
        self.lives_poller.start()
        self.notification_dispatcher.start()

    async def shutdown(self) -> None:
        """Stop background work and cancel pending timers."""
        if self._lives_poller is not None:
            await self._lives_poller.stop()
        if self._notification_dispatcher is not None:
            await self._notification_dispatcher.stop()
        if self._timers is not None:
            await self._timers.shutdown()

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._user_locks = None
        self._timers = None
        self._preferences = None
        self._notification_scheduler = None
        self._notification_service = None
        self._notification_dispatcher = None
        self._profiles = None
        self._user_service = None
        self._lives_service = None
        self._lives_poller = None
        self._scorer = None
        self._room_service = None
        self._tournament_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_user_service() -> "UserService":
    """FastAPI dependency for user service."""
    return get_container().users


def get_lives_service() -> LivesService:
    """FastAPI dependency for lives service."""
    return get_container().lives


def get_notification_service() -> "NotificationService":
    """FastAPI dependency for notification service."""
    return get_container().notifications


def get_preference_store() -> "IPreferenceStore":
    """FastAPI dependency for the preference store."""
    return get_container().preferences


def get_room_service() -> "IRoomService":
    """FastAPI dependency for room service."""
    return get_container().rooms


def get_tournament_service() -> "ITournamentService":
    """FastAPI dependency for tournament service."""
    return get_container().tournaments


async def get_current_player(
    user: AuthenticatedUser = Depends(get_current_user),
) -> User:
    """
    Dependency that resolves the caller's game profile.

    Creates the profile on first use and adds the user to life polling.
    """
    container = get_container()
    player = await container.users.ensure_profile(
        user.id,
        email=user.email,
        display_name=user.display_name,
        photo_url=user.photo_url,
        provider=AuthProvider(user.provider),
    )
    container.lives_poller.track(player.id)
    return player


async def require_play_permission(
    player: User = Depends(get_current_player),
    lives: LivesService = Depends(get_lives_service),
) -> User:
    """
    Dependency for endpoints that enter a game.

    Answers 403 when the player has no lives (and no premium) or has used
    up today's plays. The body carries the reason and the ways out.
    """
    permission = await lives.can_play(player.id)
    if not permission.allowed:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=permission.model_dump(mode="json"),
        )

    daily = await lives.check_daily_limit(player.id)
    if not daily.within_limit:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"allowed": False, "reason": DAILY_LIMIT_REASON, **daily.model_dump()},
        )
    return player
