"""
Tournament repository for database access.

Tournaments live in the ``tournaments`` table, one row per tournament,
with ``participants`` and ``rounds`` as JSON columns.
"""

from supabase import Client

from shared.repository import SupabaseDocumentStore

from .models import Tournament

TABLE = "tournaments"


class TournamentRepository(SupabaseDocumentStore[Tournament]):
    """Supabase-backed tournament store."""

    def __init__(self, db: Client) -> None:
        super().__init__(db, TABLE, Tournament)
