"""
Users module interfaces.

IUserProfileStore is the boundary to the identity/profile collaborator.
The lives, rooms and tournaments modules only ever see these protocols.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import GameResult, User


@runtime_checkable
class IUserProfileStore(Protocol):
    """
    Interface for profile persistence.

    Implementations only promise read-your-own-writes consistency.
    """

    async def get(self, user_id: str) -> Optional[User]:
        """Get a profile by user ID, or None if it does not exist."""
        ...

    async def upsert(self, user_id: str, changes: dict[str, Any]) -> User:
        """
        Apply a partial update, creating the profile if needed.

        Args:
            user_id: Profile ID
            changes: Field name to new value

        Returns:
            The profile after the write

        Raises:
            StoreError: If the write failed
        """
        ...


@runtime_checkable
class IUserStatsService(Protocol):
    """
    Interface for best-effort stat bookkeeping.

    Implementations must never raise: a lost stat increment must not
    block gameplay.
    """

    async def record_game_result(self, result: GameResult) -> Optional[User]:
        """Add a finished room's score, words and outcome to the profile."""
        ...

    async def record_tournament_win(self, user_id: str) -> Optional[User]:
        """Count a tournament championship and unlock its badge."""
        ...
