"""
Room API endpoints.

Lobby (create, join by code, quick match), play (ready, live word,
submissions, timeout) and an SSE stream of room updates.
"""

import asyncio

from fastapi import APIRouter, Depends, HTTPException
from sse_starlette.sse import EventSourceResponse

from api.dependencies import get_current_player, get_room_service, require_play_permission
from modules.users.models import User
from modules.words.models import WordValidation

from .exceptions import (
    PlayerNotInRoomError,
    RoomClockRunningError,
    RoomNotActiveError,
    RoomNotFoundError,
)
from .interfaces import IRoomService
from .models import (
    CreateRoomRequest,
    CurrentWordRequest,
    GameRoom,
    InviteRequest,
    InviteResponse,
    JoinOutcome,
    JoinResult,
    JoinRoomRequest,
    RoomStatus,
    SetReadyRequest,
    SubmitWordRequest,
)

router = APIRouter()


@router.post("", response_model=GameRoom, status_code=201)
async def create_room(
    request: CreateRoomRequest,
    player: User = Depends(require_play_permission),
    service: IRoomService = Depends(get_room_service),
) -> GameRoom:
    """
    Open a new room with the caller as host.

    Share the returned code with a friend; the game starts once both
    players are ready.
    """
    return await service.create_room(
        player.id,
        request.mode,
        max_points=request.max_points,
        time_limit=request.time_limit,
    )


@router.post("/join", response_model=JoinResult)
async def join_room(
    request: JoinRoomRequest,
    player: User = Depends(require_play_permission),
    service: IRoomService = Depends(get_room_service),
) -> JoinResult:
    """
    Join a room by its code.

    Joining a room you are already in returns it with outcome
    'already_in_room'.
    """
    result = await service.join_room(request.code, player.id)
    if result.outcome == JoinOutcome.NOT_FOUND:
        raise HTTPException(status_code=404, detail="Room not found")
    if result.outcome == JoinOutcome.ROOM_FULL:
        raise HTTPException(status_code=409, detail="Room is full")
    return result


@router.post("/match", response_model=GameRoom)
async def find_match(
    player: User = Depends(require_play_permission),
    service: IRoomService = Depends(get_room_service),
) -> GameRoom:
    """Join a waiting opponent, or open a points room and wait for one."""
    return await service.find_or_create_match(player.id)


@router.get("/{room_id}", response_model=GameRoom)
async def get_room(
    room_id: str,
    player: User = Depends(get_current_player),
    service: IRoomService = Depends(get_room_service),
) -> GameRoom:
    try:
        return await service.get_room(room_id)
    except RoomNotFoundError:
        raise HTTPException(status_code=404, detail="Room not found")


@router.post("/{room_id}/ready", response_model=GameRoom)
async def set_ready(
    room_id: str,
    request: SetReadyRequest,
    player: User = Depends(get_current_player),
    service: IRoomService = Depends(get_room_service),
) -> GameRoom:
    """
    Mark the caller ready (or not).

    When both players are ready the room starts and each spends a life.
    """
    try:
        return await service.set_ready(room_id, player.id, request.ready)
    except RoomNotFoundError:
        raise HTTPException(status_code=404, detail="Room not found")
    except PlayerNotInRoomError:
        raise HTTPException(status_code=403, detail="Not a player in this room")
    except RoomNotActiveError as e:
        raise HTTPException(status_code=409, detail=e.message)


@router.put("/{room_id}/current-word", response_model=GameRoom)
async def update_current_word(
    room_id: str,
    request: CurrentWordRequest,
    player: User = Depends(get_current_player),
    service: IRoomService = Depends(get_room_service),
) -> GameRoom:
    """Publish the word the caller is tracing so the opponent can see it."""
    try:
        return await service.update_current_word(room_id, player.id, request.word)
    except RoomNotFoundError:
        raise HTTPException(status_code=404, detail="Room not found")
    except PlayerNotInRoomError:
        raise HTTPException(status_code=403, detail="Not a player in this room")
    except RoomNotActiveError as e:
        raise HTTPException(status_code=409, detail=e.message)


@router.post("/{room_id}/words", response_model=WordValidation)
async def submit_word(
    room_id: str,
    request: SubmitWordRequest,
    player: User = Depends(get_current_player),
    service: IRoomService = Depends(get_room_service),
) -> WordValidation:
    """
    Submit a word.

    Invalid and repeated words are not errors: they come back with
    is_valid/already_submitted set and 0 points.
    """
    try:
        return await service.submit_word(room_id, player.id, request.word)
    except RoomNotFoundError:
        raise HTTPException(status_code=404, detail="Room not found")
    except PlayerNotInRoomError:
        raise HTTPException(status_code=403, detail="Not a player in this room")
    except RoomNotActiveError as e:
        raise HTTPException(status_code=409, detail=e.message)


@router.post("/{room_id}/timeout", response_model=GameRoom)
async def report_timeout(
    room_id: str,
    player: User = Depends(get_current_player),
    service: IRoomService = Depends(get_room_service),
) -> GameRoom:
    """
    Report that a timed room's clock ran out.

    Refused while time is left; the server clock is authoritative.
    """
    try:
        room = await service.get_room(room_id)
        if not room.has_player(player.id):
            raise HTTPException(status_code=403, detail="Not a player in this room")
        return await service.end_by_timeout(room_id, only_if_expired=True)
    except RoomNotFoundError:
        raise HTTPException(status_code=404, detail="Room not found")
    except (RoomNotActiveError, RoomClockRunningError) as e:
        raise HTTPException(status_code=409, detail=e.message)


@router.post("/{room_id}/invite", response_model=InviteResponse)
async def invite_player(
    room_id: str,
    request: InviteRequest,
    player: User = Depends(get_current_player),
    service: IRoomService = Depends(get_room_service),
) -> InviteResponse:
    """Send a game invite notification for the caller's waiting room."""
    try:
        sent = await service.invite_player(room_id, player.id, request.user_id)
    except RoomNotFoundError:
        raise HTTPException(status_code=404, detail="Room not found")
    except PlayerNotInRoomError:
        raise HTTPException(status_code=403, detail="Not a player in this room")
    except RoomNotActiveError as e:
        raise HTTPException(status_code=409, detail=e.message)
    return InviteResponse(sent=sent)


async def room_event_generator(room_id: str, service: IRoomService):
    """
    Generate SSE events for a room.

    Sends the current room first, then the room after every write, and
    ends once the room is finished.

    Yields events in the format:
        event: room
        data: <GameRoom JSON>
    """
    updates: asyncio.Queue = asyncio.Queue()
    unsubscribe = service.subscribe(room_id, updates.put_nowait)
    try:
        room = await service.get_room(room_id)
        yield {"event": "room", "data": room.model_dump_json()}
        while room.status != RoomStatus.FINISHED:
            room = await updates.get()
            if room is None:
                break
            yield {"event": "room", "data": room.model_dump_json()}
    finally:
        unsubscribe()


@router.get("/{room_id}/stream")
async def stream_room(
    room_id: str,
    player: User = Depends(get_current_player),
    service: IRoomService = Depends(get_room_service),
):
    """
    Stream room updates via SSE.

    Replaces polling: the opponent's score, live word and the final result
    arrive as 'room' events carrying the full room.
    """
    try:
        await service.get_room(room_id)
    except RoomNotFoundError:
        raise HTTPException(status_code=404, detail="Room not found")

    return EventSourceResponse(
        room_event_generator(room_id, service),
        media_type="text/event-stream",
    )
