"""Tests for shared/repository.py."""

import pytest
from unittest.mock import MagicMock
from datetime import datetime, timezone

from postgrest.exceptions import APIError
from pydantic import BaseModel

from shared.exceptions import StoreConflictError, StoreError
from shared.repository import BaseRepository, SupabaseDocumentStore


class Doc(BaseModel):
    id: str
    name: str = ""
    version: int = 1
    created_at: datetime = datetime(2025, 1, 1, tzinfo=timezone.utc)


def row(**overrides) -> dict:
    data = {"id": "doc-1", "name": "first", "version": 1, "created_at": "2025-01-01T00:00:00+00:00"}
    data.update(overrides)
    return data


class TestBaseRepository:
    """Tests for BaseRepository base class."""

    def test_init_stores_db_client(self):
        """Should store the database client in _db attribute."""
        mock_db = MagicMock()
        repo = BaseRepository(mock_db)
        assert repo._db is mock_db

    def test_subclass_can_access_db(self):
        """Subclass should be able to access _db and use it."""
        mock_db = MagicMock()
        mock_db.table.return_value.select.return_value.execute.return_value.data = [
            {"id": "123", "name": "test"}
        ]

        class TestRepository(BaseRepository[dict]):
            def get_all(self) -> list[dict]:
                result = self._db.table("test").select("*").execute()
                return result.data

        repo = TestRepository(mock_db)
        result = repo.get_all()

        assert result == [{"id": "123", "name": "test"}]
        mock_db.table.assert_called_once_with("test")


class TestSupabaseDocumentStore:
    @pytest.mark.asyncio
    async def test_get_maps_row_to_model(self):
        mock_db = MagicMock()
        mock_db.table.return_value.select.return_value.eq.return_value.execute.return_value.data = [row()]
        store = SupabaseDocumentStore(mock_db, "docs", Doc)

        doc = await store.get("doc-1")

        assert isinstance(doc, Doc)
        assert doc.name == "first"
        mock_db.table.assert_called_with("docs")

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self):
        mock_db = MagicMock()
        mock_db.table.return_value.select.return_value.eq.return_value.execute.return_value.data = []
        store = SupabaseDocumentStore(mock_db, "docs", Doc)

        assert await store.get("missing") is None

    @pytest.mark.asyncio
    async def test_create_inserts_json_payload(self):
        mock_db = MagicMock()
        mock_db.table.return_value.insert.return_value.execute.return_value.data = [row()]
        store = SupabaseDocumentStore(mock_db, "docs", Doc)

        created = await store.create(Doc(id="doc-1", name="first"))

        assert created.id == "doc-1"
        payload = mock_db.table.return_value.insert.call_args[0][0]
        assert payload["created_at"] == "2025-01-01T00:00:00Z"

    @pytest.mark.asyncio
    async def test_update_with_expected_version_filters_on_version(self):
        mock_db = MagicMock()
        update_query = mock_db.table.return_value.update.return_value.eq.return_value
        update_query.eq.return_value.execute.return_value.data = [row(name="second", version=4)]
        store = SupabaseDocumentStore(mock_db, "docs", Doc)

        updated = await store.update("doc-1", {"name": "second"}, expected_version=3)

        assert updated.version == 4
        payload = mock_db.table.return_value.update.call_args[0][0]
        assert payload == {"name": "second", "version": 4}
        update_query.eq.assert_called_once_with("version", 3)

    @pytest.mark.asyncio
    async def test_update_conflict_raises(self):
        mock_db = MagicMock()
        update_query = mock_db.table.return_value.update.return_value.eq.return_value
        update_query.eq.return_value.execute.return_value.data = []
        store = SupabaseDocumentStore(mock_db, "docs", Doc)

        with pytest.raises(StoreConflictError):
            await store.update("doc-1", {"name": "second"}, expected_version=3)

    @pytest.mark.asyncio
    async def test_api_error_becomes_store_error(self):
        mock_db = MagicMock()
        mock_db.table.return_value.select.return_value.eq.return_value.execute.side_effect = APIError(
            {"message": "connection refused", "code": "500"}
        )
        store = SupabaseDocumentStore(mock_db, "docs", Doc)

        with pytest.raises(StoreError):
            await store.get("doc-1")

    @pytest.mark.asyncio
    async def test_query_pushes_where_down_and_applies_predicate(self):
        mock_db = MagicMock()
        query = mock_db.table.return_value.select.return_value
        query.eq.return_value.order.return_value.execute.return_value.data = [
            row(id="a", name="keep"),
            row(id="b", name="drop"),
        ]
        store = SupabaseDocumentStore(mock_db, "docs", Doc)

        docs = await store.query(predicate=lambda d: d.name == "keep", where={"name": "x"})

        assert [d.id for d in docs] == ["a"]
        query.eq.assert_called_once_with("name", "x")

    @pytest.mark.asyncio
    async def test_writes_notify_local_subscribers(self):
        mock_db = MagicMock()
        mock_db.table.return_value.insert.return_value.execute.return_value.data = [row()]
        store = SupabaseDocumentStore(mock_db, "docs", Doc)
        seen = []
        store.subscribe("doc-1", seen.append)

        await store.create(Doc(id="doc-1", name="first"))

        assert [d.name for d in seen] == ["first"]
