"""
Tournament API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_current_player, get_tournament_service, require_play_permission
from modules.users.models import User

from .exceptions import (
    InvalidMatchResultError,
    TournamentFullError,
    TournamentHostOnlyError,
    TournamentNotActiveError,
    TournamentNotFoundError,
    TournamentNotJoinableError,
)
from .interfaces import ITournamentService
from .models import RecordMatchResultRequest, Tournament

router = APIRouter()


@router.post("", response_model=Tournament, status_code=201)
async def create_tournament(
    player: User = Depends(require_play_permission),
    service: ITournamentService = Depends(get_tournament_service),
) -> Tournament:
    """
    Open a tournament with the caller as host.

    Other players have 30 seconds to join; then the empty slots are filled
    with bots and round 1 starts.
    """
    return await service.create_tournament(player.id)


@router.get("", response_model=list[Tournament])
async def list_open_tournaments(
    player: User = Depends(get_current_player),
    service: ITournamentService = Depends(get_tournament_service),
) -> list[Tournament]:
    """List waiting tournaments with free slots."""
    return await service.list_open_tournaments()


@router.get("/{tournament_id}", response_model=Tournament)
async def get_tournament(
    tournament_id: str,
    player: User = Depends(get_current_player),
    service: ITournamentService = Depends(get_tournament_service),
) -> Tournament:
    try:
        return await service.get_tournament(tournament_id)
    except TournamentNotFoundError:
        raise HTTPException(status_code=404, detail="Tournament not found")


@router.post("/{tournament_id}/join", response_model=Tournament)
async def join_tournament(
    tournament_id: str,
    player: User = Depends(require_play_permission),
    service: ITournamentService = Depends(get_tournament_service),
) -> Tournament:
    try:
        return await service.join_tournament(tournament_id, player.id)
    except TournamentNotFoundError:
        raise HTTPException(status_code=404, detail="Tournament not found")
    except (TournamentFullError, TournamentNotJoinableError) as e:
        raise HTTPException(status_code=409, detail=e.message)


@router.post("/{tournament_id}/start", response_model=Tournament)
async def start_tournament(
    tournament_id: str,
    player: User = Depends(get_current_player),
    service: ITournamentService = Depends(get_tournament_service),
) -> Tournament:
    """Host only: start now, filling the empty slots with bots."""
    try:
        return await service.start_now(tournament_id, player.id)
    except TournamentNotFoundError:
        raise HTTPException(status_code=404, detail="Tournament not found")
    except TournamentHostOnlyError:
        raise HTTPException(status_code=403, detail="Only the host can start the tournament")
    except TournamentNotActiveError as e:
        raise HTTPException(status_code=409, detail=e.message)


@router.delete("/{tournament_id}", response_model=Tournament)
async def disband_tournament(
    tournament_id: str,
    player: User = Depends(get_current_player),
    service: ITournamentService = Depends(get_tournament_service),
) -> Tournament:
    """Host only: cancel a tournament that has not started."""
    try:
        return await service.disband(tournament_id, player.id)
    except TournamentNotFoundError:
        raise HTTPException(status_code=404, detail="Tournament not found")
    except TournamentHostOnlyError:
        raise HTTPException(status_code=403, detail="Only the host can disband the tournament")
    except TournamentNotActiveError as e:
        raise HTTPException(status_code=409, detail=e.message)


@router.post("/{tournament_id}/matches/result", response_model=Tournament)
async def record_match_result(
    tournament_id: str,
    request: RecordMatchResultRequest,
    player: User = Depends(get_current_player),
    service: ITournamentService = Depends(get_tournament_service),
) -> Tournament:
    """
    Report the result of one of the caller's bracket matches.

    Completing the last open match of a round builds the next round;
    completing the final decides the champion.
    """
    try:
        tournament = await service.get_tournament(tournament_id)
        current = tournament.current_round
        if (
            current is None
            or current.round_number != request.round_number
            or not 0 <= request.match_index < len(current.matches)
            or not current.matches[request.match_index].involves(player.id)
        ):
            raise HTTPException(status_code=403, detail="Not a player in this match")

        return await service.record_match_result(
            tournament_id,
            request.round_number,
            request.match_index,
            request.winner_id,
            request.score1,
            request.score2,
        )
    except TournamentNotFoundError:
        raise HTTPException(status_code=404, detail="Tournament not found")
    except (TournamentNotActiveError, InvalidMatchResultError) as e:
        raise HTTPException(status_code=409, detail=e.message)
