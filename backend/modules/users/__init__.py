"""
Users module.

Profile persistence boundary plus score, win and badge bookkeeping.

Public API:
- IUserProfileStore: Interface to the profile collaborator
- IUserStatsService: Interface for best-effort stat updates
- User, Badge, GameResult: Data models
- InMemoryUserProfileStore, SupabaseUserProfileStore: Store implementations
- UserService: Profile creation and stats
"""

from .interfaces import IUserProfileStore, IUserStatsService
from .models import (
    AuthProvider,
    Badge,
    BadgeDefinition,
    BadgeId,
    BADGE_CATALOGUE,
    DEFAULT_LIVES,
    GameResult,
    User,
)
from .exceptions import UserNotFoundError
from .store import InMemoryUserProfileStore
from .repository import SupabaseUserProfileStore
from .service import UserService, earned_badges

__all__ = [
    # Interfaces
    "IUserProfileStore",
    "IUserStatsService",
    # Models
    "AuthProvider",
    "Badge",
    "BadgeDefinition",
    "BadgeId",
    "BADGE_CATALOGUE",
    "DEFAULT_LIVES",
    "GameResult",
    "User",
    # Exceptions
    "UserNotFoundError",
    # Stores
    "InMemoryUserProfileStore",
    "SupabaseUserProfileStore",
    # Service
    "UserService",
    "earned_badges",
]
