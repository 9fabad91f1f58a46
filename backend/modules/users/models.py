"""
Users module data models.

The profile is owned by the identity collaborator; the game engine only
reads it and writes partial updates (lives, counters, badges).
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from shared.clock import utc_now

DEFAULT_LIVES = 5


class AuthProvider(str, Enum):
    """How the user signed in."""

    GOOGLE = "google"
    FACEBOOK = "facebook"
    EMAIL = "email"


class BadgeId(str, Enum):
    """Achievement identifiers."""

    FAST_TYPER = "fast_typer"
    WORD_MASTER = "word_master"
    TOURNAMENT_WINNER = "tournament_winner"
    STREAK_MASTER = "streak_master"
    SOCIAL_PLAYER = "social_player"
    HIGH_SCORER = "high_scorer"


class BadgeDefinition(BaseModel):
    """Catalogue entry for an achievement."""

    id: BadgeId
    name: str
    description: str
    icon: str
    target: int = Field(default=1, description="Progress needed to unlock")

    model_config = {"frozen": True}


class Badge(BaseModel):
    """An achievement unlocked by a user."""

    id: str = Field(..., description="Badge identifier")
    name: str = Field(..., description="Display name")
    description: str = Field(default="", description="What it takes to earn it")
    icon: str = Field(default="", description="Emoji icon")
    unlocked_at: datetime = Field(default_factory=utc_now)


class User(BaseModel):
    """A player profile with game state."""

    id: str = Field(..., description="User ID")
    email: str = Field(default="", description="Email address")
    display_name: str = Field(default="Oyuncu", description="Public name")
    photo_url: Optional[str] = Field(None, description="Avatar URL")
    provider: AuthProvider = Field(default=AuthProvider.EMAIL)

    # Lives
    lives: int = Field(default=DEFAULT_LIVES, ge=0, description="Remaining lives")
    last_life_regeneration: datetime = Field(
        default_factory=utc_now,
        description="Anchor of the regeneration schedule",
    )
    premium_until: Optional[datetime] = Field(
        None,
        description="Life gating is bypassed until this time",
    )

    # Counters
    total_score: int = Field(default=0, ge=0)
    games_won: int = Field(default=0, ge=0)
    tournaments_won: int = Field(default=0, ge=0)
    words_found: int = Field(default=0, ge=0)
    win_streak: int = Field(default=0, ge=0)

    badges: list[Badge] = Field(default_factory=list)

    created_at: datetime = Field(default_factory=utc_now)

    def has_badge(self, badge_id: str) -> bool:
        return any(badge.id == badge_id for badge in self.badges)

    def is_premium(self, now: datetime) -> bool:
        return self.premium_until is not None and self.premium_until > now


class GameResult(BaseModel):
    """One player's outcome in a finished room, fed into stats."""

    user_id: str
    score: int = Field(default=0, ge=0)
    words_found: int = Field(default=0, ge=0)
    won: bool = False


BADGE_CATALOGUE: dict[BadgeId, BadgeDefinition] = {
    BadgeId.FAST_TYPER: BadgeDefinition(
        id=BadgeId.FAST_TYPER,
        name="Hızlı Yazıcı",
        description="1 dakikada 10 kelime yaz",
        icon="⚡",
        target=10,
    ),
    BadgeId.WORD_MASTER: BadgeDefinition(
        id=BadgeId.WORD_MASTER,
        name="Kelime Ustası",
        description="100 geçerli kelime yaz",
        icon="📚",
        target=100,
    ),
    BadgeId.TOURNAMENT_WINNER: BadgeDefinition(
        id=BadgeId.TOURNAMENT_WINNER,
        name="Turnuva Şampiyonu",
        description="İlk turnuva şampiyonluğun",
        icon="🏆",
        target=1,
    ),
    BadgeId.STREAK_MASTER: BadgeDefinition(
        id=BadgeId.STREAK_MASTER,
        name="Seri Ustası",
        description="5 maç üst üste kazan",
        icon="🔥",
        target=5,
    ),
    BadgeId.SOCIAL_PLAYER: BadgeDefinition(
        id=BadgeId.SOCIAL_PLAYER,
        name="Sosyal Oyuncu",
        description="10 farklı kişiyle oyna",
        icon="👥",
        target=10,
    ),
    BadgeId.HIGH_SCORER: BadgeDefinition(
        id=BadgeId.HIGH_SCORER,
        name="Yüksek Puanlı",
        description="Tek maçta 150 puan al",
        icon="🎯",
        target=150,
    ),
}
