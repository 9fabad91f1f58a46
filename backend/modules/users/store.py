"""
In-memory profile store.

For testing and development. Use SupabaseUserProfileStore for production.
"""

from typing import Any, Optional

from .models import User


class InMemoryUserProfileStore:
    """Profile store keeping User models in a dict."""

    def __init__(self, users: Optional[list[User]] = None):
        self._users: dict[str, User] = {}
        for user in users or []:
            self._users[user.id] = user.model_copy(deep=True)

    async def get(self, user_id: str) -> Optional[User]:
        user = self._users.get(user_id)
        return user.model_copy(deep=True) if user is not None else None

    async def upsert(self, user_id: str, changes: dict[str, Any]) -> User:
        current = self._users.get(user_id)
        data = current.model_dump() if current is not None else {"id": user_id}
        data.update(changes)
        data["id"] = user_id

        user = User.model_validate(data)
        self._users[user_id] = user
        return user.model_copy(deep=True)

    def __len__(self) -> int:
        return len(self._users)
