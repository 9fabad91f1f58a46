"""
Rooms module interface.
"""

from typing import Callable, Optional, Protocol, runtime_checkable

from modules.words.models import WordValidation
from shared.store import ChangeCallback

from .models import GameMode, GameRoom, JoinResult


@runtime_checkable
class IRoomService(Protocol):
    """
    Interface for two-player room operations.

    All mutations of one room are serialized.
    """

    async def create_room(
        self,
        host_id: str,
        mode: GameMode = GameMode.POINTS,
        max_points: Optional[int] = None,
        time_limit: Optional[int] = None,
    ) -> GameRoom:
        """Open a waiting room with a fresh board and the host as first player."""
        ...

    async def join_room(self, code: str, user_id: str) -> JoinResult:
        """
        Join a room by code.

        Rejoining returns ALREADY_IN_ROOM with the same room; a full room
        or an unknown code come back as outcomes, not exceptions.
        """
        ...

    async def find_or_create_match(self, user_id: str) -> GameRoom:
        """Join the first waiting room with one other player, or open one."""
        ...

    async def get_room(self, room_id: str) -> GameRoom:
        """
        Get a room.

        Raises:
            RoomNotFoundError: If the room does not exist
        """
        ...

    def subscribe(self, room_id: str, on_change: ChangeCallback) -> Callable[[], None]:
        """Receive the room after every write. Returns an unsubscribe function."""
        ...

    async def set_ready(self, room_id: str, user_id: str, ready: bool = True) -> GameRoom:
        """Flip a player's ready flag; two ready players start the game."""
        ...

    async def update_current_word(self, room_id: str, user_id: str, word: str) -> GameRoom:
        """Publish the word a player is tracing."""
        ...

    async def submit_word(self, room_id: str, user_id: str, raw_word: str) -> WordValidation:
        """
        Score a word for a player.

        Raises:
            RoomNotFoundError: If the room does not exist
            PlayerNotInRoomError: If the user is not in the room
            RoomNotActiveError: If the room is not playing
        """
        ...

    async def end_by_timeout(self, room_id: str, only_if_expired: bool = False) -> GameRoom:
        """Finish a timed room: higher score wins, an exact tie is a draw."""
        ...

    async def invite_player(self, room_id: str, host_id: str, invitee_id: str) -> bool:
        """Notify another user about a waiting room. Returns True if sent."""
        ...
