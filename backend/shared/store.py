"""
Document store interface for rooms and tournaments.

The game engine never talks to a database directly. It reads a document,
changes it, and writes the changed fields back through this interface.
Two implementations exist:

- InMemoryDocumentStore: process-local, used in tests and single-node dev
- SupabaseDocumentStore (shared.repository): Postgres rows via Supabase
"""

from collections import defaultdict
from typing import (
    Any,
    Awaitable,
    Callable,
    Generic,
    Optional,
    Protocol,
    TypeVar,
    Union,
    runtime_checkable,
)
import inspect
import logging

from pydantic import BaseModel

from .exceptions import StoreConflictError, StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

ChangeCallback = Callable[[Optional[Any]], Union[None, Awaitable[None]]]
Predicate = Callable[[Any], bool]


@runtime_checkable
class IDocumentStore(Protocol[T]):
    """
    Interface for a collection of versioned documents.

    Documents are pydantic models with ``id`` and ``version`` fields.
    Every successful update bumps ``version`` by one.
    """

    async def create(self, entity: T) -> T:
        """Insert a new document and return it as stored."""
        ...

    async def get(self, entity_id: str) -> Optional[T]:
        """Get a document by ID, or None if it does not exist."""
        ...

    async def update(
        self,
        entity_id: str,
        changes: dict[str, Any],
        expected_version: Optional[int] = None,
    ) -> T:
        """
        Apply a partial update.

        Args:
            entity_id: Document ID
            changes: Field name to new value
            expected_version: When given, the write only succeeds if the
                stored version still matches (compare-and-set)

        Returns:
            The document after the update

        Raises:
            StoreConflictError: If expected_version does not match
            StoreError: If the document does not exist or the write failed
        """
        ...

    async def query(
        self,
        predicate: Optional[Predicate] = None,
        where: Optional[dict[str, Any]] = None,
    ) -> list[T]:
        """
        List documents in creation order.

        Args:
            predicate: Optional filter applied to each document
            where: Optional field equality filters (pushed down where possible)
        """
        ...

    def subscribe(self, entity_id: str, on_change: ChangeCallback) -> Callable[[], None]:
        """
        Register a callback that receives the document after every write.

        Returns:
            A function that removes the subscription
        """
        ...


class SubscriberRegistry:
    """Fan-out of document changes to in-process subscribers."""

    def __init__(self) -> None:
        self._subscribers: dict[str, list[ChangeCallback]] = defaultdict(list)

    def subscribe(self, entity_id: str, on_change: ChangeCallback) -> Callable[[], None]:
        self._subscribers[entity_id].append(on_change)

        def unsubscribe() -> None:
            callbacks = self._subscribers.get(entity_id, [])
            if on_change in callbacks:
                callbacks.remove(on_change)
            if not callbacks:
                self._subscribers.pop(entity_id, None)

        return unsubscribe

    def subscriber_count(self, entity_id: str) -> int:
        return len(self._subscribers.get(entity_id, []))

    async def notify(self, entity_id: str, entity: Optional[BaseModel]) -> None:
        for callback in list(self._subscribers.get(entity_id, [])):
            snapshot = entity.model_copy(deep=True) if entity is not None else None
            try:
                result = callback(snapshot)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("Subscriber for %s failed", entity_id)


def matches_where(entity: BaseModel, where: Optional[dict[str, Any]]) -> bool:
    """Equality filter over top-level fields, comparing enum values as strings."""
    if not where:
        return True
    for field, expected in where.items():
        value = getattr(entity, field, None)
        if hasattr(value, "value"):
            value = value.value
        if hasattr(expected, "value"):
            expected = expected.value
        if value != expected:
            return False
    return True


class InMemoryDocumentStore(Generic[T]):
    """
    Document store with in-memory storage.

    For testing and development. Use SupabaseDocumentStore for production.
    Returned documents are deep copies, so callers cannot mutate stored state
    without going through update().
    """

    def __init__(self, model: type[T], name: str):
        self._model = model
        self._name = name
        self._docs: dict[str, T] = {}
        self._subscribers = SubscriberRegistry()

    async def create(self, entity: T) -> T:
        entity_id = getattr(entity, "id")
        if entity_id in self._docs:
            raise StoreError(self._name, f"document already exists: {entity_id}")
        self._docs[entity_id] = entity.model_copy(deep=True)
        await self._subscribers.notify(entity_id, entity)
        return entity.model_copy(deep=True)

    async def get(self, entity_id: str) -> Optional[T]:
        entity = self._docs.get(entity_id)
        return entity.model_copy(deep=True) if entity is not None else None

    async def update(
        self,
        entity_id: str,
        changes: dict[str, Any],
        expected_version: Optional[int] = None,
    ) -> T:
        current = self._docs.get(entity_id)
        if current is None:
            raise StoreError(self._name, f"document not found: {entity_id}")

        version = getattr(current, "version")
        if expected_version is not None and version != expected_version:
            raise StoreConflictError(self._name, entity_id, expected_version)

        data = current.model_dump()
        data.update(changes)
        data["version"] = version + 1
        updated = self._model.model_validate(data)

        self._docs[entity_id] = updated
        await self._subscribers.notify(entity_id, updated)
        return updated.model_copy(deep=True)

    async def query(
        self,
        predicate: Optional[Predicate] = None,
        where: Optional[dict[str, Any]] = None,
    ) -> list[T]:
        return [
            doc.model_copy(deep=True)
            for doc in self._docs.values()
            if matches_where(doc, where) and (predicate is None or predicate(doc))
        ]

    def subscribe(self, entity_id: str, on_change: ChangeCallback) -> Callable[[], None]:
        return self._subscribers.subscribe(entity_id, on_change)

    def __len__(self) -> int:
        return len(self._docs)
