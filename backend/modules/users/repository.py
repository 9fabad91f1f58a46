"""
Profile repository for database access.

Encapsulates Supabase queries for the ``profiles`` table. Badges are kept
in a JSON column.
"""

from typing import Any, Optional

from postgrest.exceptions import APIError
from pydantic_core import to_jsonable_python

from shared.exceptions import StoreError
from shared.repository import BaseRepository

from .models import User

PROFILES_TABLE = "profiles"


class SupabaseUserProfileStore(BaseRepository[User]):
    """
    Profile store backed by Supabase.

    Note: This repository does NOT perform authorization checks.
    The API layer only ever passes the authenticated user's own ID.
    """

    async def get(self, user_id: str) -> Optional[User]:
        try:
            result = self._db.table(PROFILES_TABLE).select("*").eq("id", user_id).execute()
        except APIError as e:
            raise StoreError(PROFILES_TABLE, str(e)) from e

        if not result.data:
            return None
        return User.model_validate(result.data[0])

    async def upsert(self, user_id: str, changes: dict[str, Any]) -> User:
        payload = to_jsonable_python(changes)
        payload["id"] = user_id

        try:
            result = self._db.table(PROFILES_TABLE).upsert(payload).execute()
        except APIError as e:
            raise StoreError(PROFILES_TABLE, str(e)) from e

        if not result.data:
            raise StoreError(PROFILES_TABLE, f"upsert returned no row for {user_id}")
        return User.model_validate(result.data[0])
