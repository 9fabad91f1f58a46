"""
Lives API endpoints.

Life pool status, rewarded ads, life purchases, premium and the daily
play counter. Payment verification happens in the store client before
these endpoints are called.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_current_player, get_lives_service
from modules.users.models import User

from .exceptions import InvalidPremiumDurationError
from .models import DailyLimit, GrantPremiumRequest, LifeSource, LivesStatus
from .service import LivesService

router = APIRouter()


@router.get("", response_model=LivesStatus)
async def get_lives(
    player: User = Depends(get_current_player),
    service: LivesService = Depends(get_lives_service),
) -> LivesStatus:
    """
    Get the current life pool.

    Regenerated lives are credited before answering.
    """
    return await service.get_status(player.id)


@router.post("/ad-reward", response_model=LivesStatus)
async def reward_ad(
    player: User = Depends(get_current_player),
    service: LivesService = Depends(get_lives_service),
) -> LivesStatus:
    """Grant one life for a watched rewarded ad."""
    await service.reward_ad(player.id)
    return await service.get_status(player.id)


@router.post("/purchase", response_model=LivesStatus)
async def purchase_life(
    player: User = Depends(get_current_player),
    service: LivesService = Depends(get_lives_service),
) -> LivesStatus:
    """Grant one purchased life."""
    await service.add_life(player.id, LifeSource.PURCHASE)
    return await service.get_status(player.id)


@router.post("/premium", response_model=LivesStatus)
async def grant_premium(
    request: GrantPremiumRequest,
    player: User = Depends(get_current_player),
    service: LivesService = Depends(get_lives_service),
) -> LivesStatus:
    """Extend the premium window; premium players play without spending lives."""
    try:
        await service.grant_premium(player.id, request.days)
    except InvalidPremiumDurationError as e:
        raise HTTPException(status_code=422, detail=e.message)
    return await service.get_status(player.id)


@router.get("/daily-limit", response_model=DailyLimit)
async def get_daily_limit(
    day: Optional[date] = Query(default=None, description="Calendar day, defaults to today (UTC)"),
    player: User = Depends(get_current_player),
    service: LivesService = Depends(get_lives_service),
) -> DailyLimit:
    """Get how many games were started on a day against the daily cap."""
    return await service.check_daily_limit(player.id, day)


@router.delete("/ad-rewards", response_model=LivesStatus)
async def clear_ad_rewards(
    player: User = Depends(get_current_player),
    service: LivesService = Depends(get_lives_service),
) -> LivesStatus:
    """Reset the rewarded-ad tally once the client has shown the bonus."""
    await service.clear_ad_rewards(player.id)
    return await service.get_status(player.id)
