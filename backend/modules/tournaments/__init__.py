"""
Tournaments module.

Eight-slot single-elimination tournaments with bot back-fill.

Public API:
- ITournamentService: Interface for tournament operations
- TournamentService: Tournament Manager implementation
- Tournament, TournamentPlayer, TournamentRound, Match: Bracket state
- TournamentRepository: Supabase-backed tournament store
"""

from .interfaces import ITournamentService
from .models import (
    BOT_NAMES,
    FILL_DELAY,
    TOURNAMENT_SIZE,
    Match,
    MatchStatus,
    RecordMatchResultRequest,
    Tournament,
    TournamentPlayer,
    TournamentRound,
    TournamentStatus,
)
from .exceptions import (
    InvalidMatchResultError,
    TournamentFullError,
    TournamentHostOnlyError,
    TournamentNotActiveError,
    TournamentNotFoundError,
    TournamentNotJoinableError,
)
from .bracket import advance_bracket, make_bots, pair_players, resolve_bot_matches
from .repository import TournamentRepository
from .service import TournamentService, fill_timer_label

__all__ = [
    # Interface
    "ITournamentService",
    # Models
    "BOT_NAMES",
    "FILL_DELAY",
    "TOURNAMENT_SIZE",
    "Match",
    "MatchStatus",
    "RecordMatchResultRequest",
    "Tournament",
    "TournamentPlayer",
    "TournamentRound",
    "TournamentStatus",
    # Exceptions
    "InvalidMatchResultError",
    "TournamentFullError",
    "TournamentHostOnlyError",
    "TournamentNotActiveError",
    "TournamentNotFoundError",
    "TournamentNotJoinableError",
    # Bracket
    "advance_bracket",
    "make_bots",
    "pair_players",
    "resolve_bot_matches",
    # Store
    "TournamentRepository",
    # Service
    "TournamentService",
    "fill_timer_label",
]
