"""
Tournaments module data models.

An eight-slot single-elimination bracket. Humans join while the tournament
waits; at the fill deadline the empty slots go to bots and round 1 is built.
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from shared.clock import utc_now

TOURNAMENT_SIZE = 8
FILL_DELAY = timedelta(seconds=30)

BOT_NAMES = [
    "BotAli",
    "BotVeli",
    "BotAyşe",
    "BotFatma",
    "BotMehmet",
    "BotZeynep",
    "BotAhmet",
]


class TournamentStatus(str, Enum):
    """Tournament lifecycle."""

    WAITING = "waiting"          # Accepting participants until the fill deadline
    IN_PROGRESS = "in-progress"  # Bracket fixed, matches being played
    COMPLETED = "completed"      # Champion decided
    CANCELLED = "cancelled"      # Disbanded by the host before it started


class MatchStatus(str, Enum):
    PENDING = "pending"
    PLAYING = "playing"
    COMPLETED = "completed"


class TournamentPlayer(BaseModel):
    """A participant, human or bot."""

    user_id: str
    display_name: str = ""
    photo_url: Optional[str] = None
    is_bot: bool = False
    current_round: int = Field(default=1, ge=1)
    eliminated: bool = False


class Match(BaseModel):
    """One pairing in a round. A match without player2 is a bye."""

    player1: str
    player2: Optional[str] = None
    winner: Optional[str] = None
    score1: int = Field(default=0, ge=0)
    score2: int = Field(default=0, ge=0)
    status: MatchStatus = MatchStatus.PENDING

    @property
    def is_bye(self) -> bool:
        return self.player2 is None

    @property
    def is_completed(self) -> bool:
        return self.status == MatchStatus.COMPLETED

    @property
    def loser(self) -> Optional[str]:
        if self.winner is None or self.is_bye:
            return None
        return self.player2 if self.winner == self.player1 else self.player1

    def involves(self, user_id: str) -> bool:
        return user_id in (self.player1, self.player2)


class TournamentRound(BaseModel):
    round_number: int = Field(..., ge=1)
    matches: list[Match] = Field(default_factory=list)

    @property
    def is_completed(self) -> bool:
        return all(match.is_completed for match in self.matches)


class Tournament(BaseModel):
    """A bracketed tournament."""

    id: str
    host_id: str
    participants: list[TournamentPlayer] = Field(default_factory=list, max_length=TOURNAMENT_SIZE)
    rounds: list[TournamentRound] = Field(default_factory=list)
    status: TournamentStatus = TournamentStatus.WAITING
    winner: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
    fill_deadline: datetime = Field(..., description="When empty slots are filled with bots")
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    version: int = Field(default=1, description="Bumped on every write")

    def get_participant(self, user_id: str) -> Optional[TournamentPlayer]:
        for participant in self.participants:
            if participant.user_id == user_id:
                return participant
        return None

    def has_participant(self, user_id: str) -> bool:
        return self.get_participant(user_id) is not None

    @property
    def humans(self) -> list[TournamentPlayer]:
        return [participant for participant in self.participants if not participant.is_bot]

    @property
    def current_round(self) -> Optional[TournamentRound]:
        return self.rounds[-1] if self.rounds else None


# API request models


class RecordMatchResultRequest(BaseModel):
    """Result of a bracket match played in a room."""

    round_number: int = Field(..., ge=1)
    match_index: int = Field(..., ge=0)
    winner_id: str = Field(..., min_length=1)
    score1: int = Field(default=0, ge=0)
    score2: int = Field(default=0, ge=0)
