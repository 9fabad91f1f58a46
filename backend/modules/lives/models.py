"""
Lives module data models.
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

MAX_LIVES = 5
LIFE_REGENERATION_INTERVAL = timedelta(minutes=30)
DAILY_PLAY_LIMIT = 50

NO_LIVES_REASON = "Oyun oynamak için canın olması gerekiyor!"
DAILY_LIMIT_REASON = "Bugünlük oyun hakkın doldu. Yarın tekrar gel!"


class LifeSource(str, Enum):
    """Where an extra life came from. Bookkeeping only."""

    AD = "ad"
    PURCHASE = "purchase"
    REWARD = "reward"
    REFUND = "refund"


class Remedy(str, Enum):
    """Ways out of an empty life pool, shown next to the refusal."""

    WAIT = "wait"
    WATCH_AD = "watch_ad"
    PURCHASE = "purchase"


class PlayPermission(BaseModel):
    """
    Whether a user may enter a room or tournament.

    Running out of lives is a normal state, so it is reported here
    instead of being raised.
    """

    allowed: bool
    reason: Optional[str] = Field(None, description="User-facing refusal text")
    lives: int = Field(default=0, ge=0)
    is_premium: bool = False
    next_life_in_seconds: int = Field(default=0, ge=0)
    remedies: list[Remedy] = Field(default_factory=list)


class LivesStatus(BaseModel):
    """Life pool snapshot for the home screen."""

    user_id: str
    lives: int = Field(..., ge=0)
    max_lives: int = MAX_LIVES
    is_premium: bool = False
    premium_until: Optional[datetime] = None
    next_life_in_seconds: int = Field(default=0, ge=0)
    full_in_seconds: int = Field(default=0, ge=0)
    ad_rewards: int = Field(default=0, ge=0)


class DailyLimit(BaseModel):
    """Per-calendar-day play counter."""

    within_limit: bool
    played: int = Field(..., ge=0)
    max: int = DAILY_PLAY_LIMIT


class GrantPremiumRequest(BaseModel):
    """Request body for activating premium after a store purchase."""

    days: int = Field(default=30, gt=0, le=365, description="Premium days to add")
