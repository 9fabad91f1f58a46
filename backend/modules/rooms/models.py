"""
Rooms module data models.

A room is one two-player game on a shared 4x4 board. Status only moves
forward: waiting -> playing -> finished.
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Optional
import string

from pydantic import BaseModel, Field

from modules.words.models import Board
from shared.clock import utc_now

MAX_PLAYERS = 2
DEFAULT_TARGET_SCORE = 100
DEFAULT_TIME_LIMIT = 120  # seconds

ROOM_CODE_LENGTH = 6
ROOM_CODE_ALPHABET = string.ascii_uppercase + string.digits


class GameMode(str, Enum):
    """How a room ends."""

    POINTS = "points"  # First to max_points wins
    TIMED = "timed"    # Highest score when time_limit runs out wins


class RoomStatus(str, Enum):
    """Room lifecycle."""

    WAITING = "waiting"    # Filling up / readying
    PLAYING = "playing"    # Accepting words
    FINISHED = "finished"  # Terminal


class Player(BaseModel):
    """A user's state inside one room."""

    user_id: str
    display_name: str = ""
    photo_url: Optional[str] = None
    score: int = Field(default=0, ge=0)
    is_ready: bool = False
    current_word: str = Field(default="", description="Word being traced, for the opponent's view")
    words_submitted: list[str] = Field(
        default_factory=list,
        description="Words already scored in this room, in order",
    )


class GameRoom(BaseModel):
    """A two-player game room."""

    id: str
    code: str = Field(..., description="6-character join code")
    mode: GameMode = GameMode.POINTS
    max_points: int = Field(default=DEFAULT_TARGET_SCORE, ge=1)
    time_limit: int = Field(default=DEFAULT_TIME_LIMIT, ge=1, description="Seconds, timed mode")
    players: list[Player] = Field(default_factory=list, max_length=MAX_PLAYERS)
    current_round: int = Field(default=1, ge=1)
    status: RoomStatus = RoomStatus.WAITING
    winner: Optional[str] = None
    is_draw: bool = False
    letters: Board = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    version: int = Field(default=1, description="Bumped on every write")

    def get_player(self, user_id: str) -> Optional[Player]:
        for player in self.players:
            if player.user_id == user_id:
                return player
        return None

    def has_player(self, user_id: str) -> bool:
        return self.get_player(user_id) is not None

    @property
    def is_full(self) -> bool:
        return len(self.players) >= MAX_PLAYERS

    @property
    def deadline(self) -> Optional[datetime]:
        """When a started timed room runs out of time."""
        if self.mode != GameMode.TIMED or self.started_at is None:
            return None
        return self.started_at + timedelta(seconds=self.time_limit)


class JoinOutcome(str, Enum):
    """Result of a join attempt. Only JOINED changes the room."""

    JOINED = "joined"
    ALREADY_IN_ROOM = "already_in_room"
    ROOM_FULL = "room_full"
    NOT_FOUND = "not_found"


class JoinResult(BaseModel):
    """Outcome of join_room, with the room when there is one to show."""

    outcome: JoinOutcome
    room: Optional[GameRoom] = None

    @property
    def ok(self) -> bool:
        return self.outcome in (JoinOutcome.JOINED, JoinOutcome.ALREADY_IN_ROOM)


# API request/response models


class CreateRoomRequest(BaseModel):
    """Request to open a new room."""

    mode: GameMode = GameMode.POINTS
    max_points: Optional[int] = Field(None, ge=10, le=1000, description="Target score, points mode")
    time_limit: Optional[int] = Field(None, ge=30, le=900, description="Seconds, timed mode")


class JoinRoomRequest(BaseModel):
    """Request to join a room by its code."""

    code: str = Field(..., min_length=ROOM_CODE_LENGTH, max_length=ROOM_CODE_LENGTH)


class SetReadyRequest(BaseModel):
    ready: bool = True


class CurrentWordRequest(BaseModel):
    word: str = Field(default="", max_length=16)


class SubmitWordRequest(BaseModel):
    word: str = Field(..., min_length=1, max_length=32)


class InviteRequest(BaseModel):
    """Invite another user to the caller's room."""

    user_id: str = Field(..., min_length=1)


class InviteResponse(BaseModel):
    sent: bool
