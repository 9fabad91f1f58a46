"""
Rooms module exceptions.

Word rejections and failed joins are not errors; they come back as
WordValidation and JoinResult values.
"""

from shared.exceptions import (
    AuthorizationError,
    NotFoundError,
    ValidationError,
)


class RoomNotFoundError(NotFoundError):
    """Raised when a room ID does not exist."""

    def __init__(self, room_id: str):
        super().__init__(
            f"Room not found: {room_id}",
            code="ROOM_NOT_FOUND",
            details={"room_id": room_id},
        )


class PlayerNotInRoomError(AuthorizationError):
    """Raised when a user acts on a room they are not playing in."""

    def __init__(self, room_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not a player in room {room_id}",
            code="PLAYER_NOT_IN_ROOM",
            details={"room_id": room_id, "user_id": user_id},
        )


class RoomNotActiveError(ValidationError):
    """Raised when an operation needs a different room status."""

    def __init__(self, room_id: str, status: str, expected: str):
        super().__init__(
            f"Room {room_id} is {status}, expected {expected}",
            code="ROOM_NOT_ACTIVE",
            details={"room_id": room_id, "status": status, "expected": expected},
        )


class RoomClockRunningError(ValidationError):
    """Raised when a timeout is reported before the room's deadline."""

    def __init__(self, room_id: str, seconds_left: int):
        super().__init__(
            f"Room {room_id} still has {seconds_left}s on the clock",
            code="ROOM_CLOCK_RUNNING",
            details={"room_id": room_id, "seconds_left": seconds_left},
        )
