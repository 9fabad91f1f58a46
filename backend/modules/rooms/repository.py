"""
Room repository for database access.

Rooms live in the ``game_rooms`` table, one row per room, with ``players``
and ``letters`` as JSON columns.
"""

from supabase import Client

from shared.repository import SupabaseDocumentStore

from .models import GameRoom

TABLE = "game_rooms"


class RoomRepository(SupabaseDocumentStore[GameRoom]):
    """Supabase-backed room store."""

    def __init__(self, db: Client) -> None:
        super().__init__(db, TABLE, GameRoom)
