"""
Tournaments module interface.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import Tournament


@runtime_checkable
class ITournamentService(Protocol):
    """Interface for tournament operations."""

    async def create_tournament(self, host_id: str) -> Tournament:
        """Open a tournament with the host as first participant and arm its fill deadline."""
        ...

    async def get_tournament(self, tournament_id: str) -> Tournament:
        """
        Get a tournament.

        Raises:
            TournamentNotFoundError: If the tournament does not exist
        """
        ...

    async def list_open_tournaments(self) -> list[Tournament]:
        """Waiting tournaments that still have a free slot."""
        ...

    async def join_tournament(self, tournament_id: str, user_id: str) -> Tournament:
        """Add a human participant while the tournament is waiting."""
        ...

    async def on_fill_deadline(self, tournament_id: str) -> Optional[Tournament]:
        """Bot-fill and start a waiting tournament; no-op otherwise."""
        ...

    async def start_now(self, tournament_id: str, user_id: str) -> Tournament:
        """Host-only early start."""
        ...

    async def disband(self, tournament_id: str, user_id: str) -> Tournament:
        """Host-only cancellation of a waiting tournament."""
        ...

    async def resume_pending(self) -> int:
        """Re-arm fill timers after a restart. Returns how many were armed."""
        ...

    async def record_match_result(
        self,
        tournament_id: str,
        round_number: int,
        match_index: int,
        winner_id: str,
        score1: int = 0,
        score2: int = 0,
    ) -> Tournament:
        """Complete a match and advance the bracket."""
        ...
