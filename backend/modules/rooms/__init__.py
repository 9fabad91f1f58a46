"""
Rooms module.

Two-player word game rooms: lobby, readiness, scoring and the end of the
game in points and timed modes.

Public API:
- IRoomService: Interface for room operations
- RoomService: Room Manager implementation
- GameRoom, Player: Room state
- JoinResult, JoinOutcome: Join attempt results
- RoomRepository: Supabase-backed room store
"""

from .interfaces import IRoomService
from .models import (
    DEFAULT_TARGET_SCORE,
    DEFAULT_TIME_LIMIT,
    MAX_PLAYERS,
    ROOM_CODE_ALPHABET,
    ROOM_CODE_LENGTH,
    CreateRoomRequest,
    CurrentWordRequest,
    GameMode,
    GameRoom,
    InviteRequest,
    InviteResponse,
    JoinOutcome,
    JoinResult,
    JoinRoomRequest,
    Player,
    RoomStatus,
    SetReadyRequest,
    SubmitWordRequest,
)
from .exceptions import (
    PlayerNotInRoomError,
    RoomClockRunningError,
    RoomNotActiveError,
    RoomNotFoundError,
)
from .repository import RoomRepository
from .service import RoomService, decide_timeout, generate_room_code, room_clock_label

__all__ = [
    # Interface
    "IRoomService",
    # Models
    "DEFAULT_TARGET_SCORE",
    "DEFAULT_TIME_LIMIT",
    "MAX_PLAYERS",
    "ROOM_CODE_ALPHABET",
    "ROOM_CODE_LENGTH",
    "CreateRoomRequest",
    "CurrentWordRequest",
    "GameMode",
    "GameRoom",
    "InviteRequest",
    "InviteResponse",
    "JoinOutcome",
    "JoinResult",
    "JoinRoomRequest",
    "Player",
    "RoomStatus",
    "SetReadyRequest",
    "SubmitWordRequest",
    # Exceptions
    "PlayerNotInRoomError",
    "RoomClockRunningError",
    "RoomNotActiveError",
    "RoomNotFoundError",
    # Store
    "RoomRepository",
    # Service
    "RoomService",
    "decide_timeout",
    "generate_room_code",
    "room_clock_label",
]
