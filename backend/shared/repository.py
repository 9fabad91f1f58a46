"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and providing shared utilities for data operations.
"""

from typing import Any, Callable, Generic, Optional, TypeVar

from postgrest.exceptions import APIError
from pydantic import BaseModel
from pydantic_core import to_jsonable_python
from supabase import Client

from .exceptions import StoreConflictError, StoreError
from .store import ChangeCallback, Predicate, SubscriberRegistry


T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db


class SupabaseDocumentStore(BaseRepository[M]):
    """
    Document store backed by a Supabase table.

    Each document is one row. Nested structures (players, rounds) are kept
    in JSON columns. Writes with an expected version add a
    ``version = <expected>`` filter, so a concurrent writer makes the update
    match zero rows and surfaces as StoreConflictError.

    Subscriptions only see writes made through this process.
    """

    def __init__(self, db: Client, table: str, model: type[M]) -> None:
        super().__init__(db)
        self._table = table
        self._model = model
        self._subscribers = SubscriberRegistry()

    async def create(self, entity: M) -> M:
        try:
            result = self._db.table(self._table).insert(
                entity.model_dump(mode="json")
            ).execute()
        except APIError as e:
            raise StoreError(self._table, str(e)) from e

        created = self._model.model_validate(result.data[0]) if result.data else entity
        await self._subscribers.notify(getattr(created, "id"), created)
        return created

    async def get(self, entity_id: str) -> Optional[M]:
        try:
            result = self._db.table(self._table).select("*").eq("id", entity_id).execute()
        except APIError as e:
            raise StoreError(self._table, str(e)) from e

        if not result.data:
            return None
        return self._model.model_validate(result.data[0])

    async def update(
        self,
        entity_id: str,
        changes: dict[str, Any],
        expected_version: Optional[int] = None,
    ) -> M:
        version = expected_version
        if version is None:
            current = await self.get(entity_id)
            if current is None:
                raise StoreError(self._table, f"document not found: {entity_id}")
            version = getattr(current, "version")

        payload = to_jsonable_python(changes)
        payload["version"] = version + 1

        try:
            query = self._db.table(self._table).update(payload).eq("id", entity_id)
            if expected_version is not None:
                query = query.eq("version", expected_version)
            result = query.execute()
        except APIError as e:
            raise StoreError(self._table, str(e)) from e

        if not result.data:
            if expected_version is not None:
                raise StoreConflictError(self._table, entity_id, expected_version)
            raise StoreError(self._table, f"document not found: {entity_id}")

        updated = self._model.model_validate(result.data[0])
        await self._subscribers.notify(entity_id, updated)
        return updated

    async def query(
        self,
        predicate: Optional[Predicate] = None,
        where: Optional[dict[str, Any]] = None,
    ) -> list[M]:
        try:
            query = self._db.table(self._table).select("*")
            for field, value in (where or {}).items():
                query = query.eq(field, to_jsonable_python(value))
            result = query.order("created_at").execute()
        except APIError as e:
            raise StoreError(self._table, str(e)) from e

        docs = [self._model.model_validate(row) for row in result.data]
        return [doc for doc in docs if predicate is None or predicate(doc)]

    def subscribe(self, entity_id: str, on_change: ChangeCallback) -> Callable[[], None]:
        return self._subscribers.subscribe(entity_id, on_change)
