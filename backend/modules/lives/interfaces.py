"""
Lives module interface.

Rooms and tournaments depend on ILivesService to spend a life when a game
starts; the API layer uses it to gate entry.
"""

from datetime import date
from typing import Protocol, runtime_checkable

from modules.users.models import User

from .models import DailyLimit, LifeSource, LivesStatus, PlayPermission


@runtime_checkable
class ILivesService(Protocol):
    """Interface for life pool operations."""

    async def refresh(self, user_id: str) -> User:
        """Credit regenerated lives and persist them if anything changed."""
        ...

    async def get_status(self, user_id: str) -> LivesStatus:
        """Refresh, then describe the pool and its timers."""
        ...

    async def can_play(self, user_id: str) -> PlayPermission:
        """Refresh, then check whether the user may start a game."""
        ...

    async def consume_for_game(self, user_id: str) -> PlayPermission:
        """
        Spend a life for a game that is starting.

        Returns:
            The permission the decision was based on. When not allowed,
            nothing was spent.
        """
        ...

    async def refund_game(self, user_id: str, permission: PlayPermission) -> None:
        """Undo a consume_for_game whose game did not start."""
        ...

    async def add_life(self, user_id: str, source: LifeSource) -> User:
        """Grant one life, capped at the maximum."""
        ...

    async def check_daily_limit(self, user_id: str, today: date) -> DailyLimit:
        """Count games started on ``today`` against the daily cap."""
        ...
