"""
User API endpoints.

The caller's game profile: counters, badges and premium state.
"""

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_current_player, get_user_service

from .exceptions import UserNotFoundError
from .models import User
from .service import UserService

router = APIRouter()


@router.get("/me", response_model=User)
async def get_my_profile(
    player: User = Depends(get_current_player),
    service: UserService = Depends(get_user_service),
) -> User:
    """
    Get the current player's profile.

    The profile is created with a full life pool on first sign-in.
    """
    try:
        return await service.get_profile(player.id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
