"""
Tournament Manager.

Runs eight-slot single-elimination tournaments:

1. create_tournament seeds the host and stores a fill deadline 30 seconds out
2. humans join until the bracket is full or the deadline fires
3. at the deadline (or when the host starts early) bots fill the empty
   slots, round 1 is paired positionally and bot-only matches play out
4. reported results advance winners round by round until the final

The fill deadline is stored on the tournament, so resume_pending() can
re-arm the timers after a restart. Cancelled timers never fire, and a
deadline that fires for a tournament that already left "waiting" does
nothing.
"""

from datetime import timedelta
from typing import Optional
import logging
import random
import uuid

from modules.notifications.service import NotificationService
from modules.users.interfaces import IUserProfileStore, IUserStatsService
from shared.clock import Clock, utc_now
from shared.locks import KeyedLock
from shared.scheduler import DeadlineScheduler
from shared.store import IDocumentStore

from .bracket import advance_bracket, make_bots, pair_players
from .exceptions import (
    InvalidMatchResultError,
    TournamentFullError,
    TournamentHostOnlyError,
    TournamentNotActiveError,
    TournamentNotFoundError,
    TournamentNotJoinableError,
)
from .models import (
    FILL_DELAY,
    TOURNAMENT_SIZE,
    MatchStatus,
    Tournament,
    TournamentPlayer,
    TournamentStatus,
)

logger = logging.getLogger(__name__)


def fill_timer_label(tournament_id: str) -> str:
    return f"tournament-fill:{tournament_id}"


class TournamentService:
    """
    Tournament Manager implementation.

    Args:
        store: Tournament documents
        scheduler: Owns the cancellable fill timers
        profiles: Optional profile store for display name snapshots
        notifications: Optional; participants hear when the bracket starts
        stats: Optional; a human champion gets the win counted
        rng: Source of simulated bot scores
    """

    def __init__(
        self,
        store: IDocumentStore[Tournament],
        scheduler: DeadlineScheduler,
        profiles: Optional[IUserProfileStore] = None,
        notifications: Optional[NotificationService] = None,
        stats: Optional[IUserStatsService] = None,
        rng: Optional[random.Random] = None,
        clock: Clock = utc_now,
        size: int = TOURNAMENT_SIZE,
        fill_delay: timedelta = FILL_DELAY,
    ):
        self._store = store
        self._scheduler = scheduler
        self._profiles = profiles
        self._notifications = notifications
        self._stats = stats
        self._rng = rng or random.Random()
        self._clock = clock
        self._size = size
        self._fill_delay = fill_delay
        self._locks = KeyedLock()

    async def create_tournament(self, host_id: str) -> Tournament:
        now = self._clock()
        tournament = Tournament(
            id=str(uuid.uuid4()),
            host_id=host_id,
            participants=[await self._participant(host_id)],
            created_at=now,
            fill_deadline=now + self._fill_delay,
        )
        created = await self._store.create(tournament)
        self._arm_fill_timer(created)
        logger.info(f"Tournament {created.id} created by {host_id}")
        return created

    async def get_tournament(self, tournament_id: str) -> Tournament:
        tournament = await self._store.get(tournament_id)
        if tournament is None:
            raise TournamentNotFoundError(tournament_id)
        return tournament

    async def list_open_tournaments(self) -> list[Tournament]:
        """Waiting tournaments with a free slot, oldest first."""
        return await self._store.query(
            predicate=lambda t: len(t.participants) < self._size,
            where={"status": TournamentStatus.WAITING},
        )

    async def join_tournament(self, tournament_id: str, user_id: str) -> Tournament:
        """
        Add a human participant.

        Idempotent for someone already in. Filling the last slot starts the
        tournament right away.

        Raises:
            TournamentNotFoundError: If the tournament does not exist
            TournamentNotJoinableError: If it is no longer waiting
            TournamentFullError: If every slot is taken
        """
        async with self._locks.hold(tournament_id):
            tournament = await self.get_tournament(tournament_id)
            if tournament.has_participant(user_id):
                return tournament
            if tournament.status != TournamentStatus.WAITING:
                raise TournamentNotJoinableError(tournament_id, tournament.status.value)
            if len(tournament.participants) >= self._size:
                raise TournamentFullError(tournament_id, self._size)

            participants = tournament.participants + [await self._participant(user_id)]
            if len(participants) < self._size:
                updated = await self._store.update(
                    tournament_id,
                    {"participants": participants},
                    expected_version=tournament.version,
                )
                logger.info(f"User {user_id} joined tournament {tournament_id} ({len(participants)}/{self._size})")
                return updated

            updated = await self._start(tournament.model_copy(update={"participants": participants}))

        self._scheduler.cancel(fill_timer_label(tournament_id))
        await self._after_start(updated)
        return updated

    async def on_fill_deadline(self, tournament_id: str) -> Optional[Tournament]:
        """
        Fill empty slots with bots and start the bracket.

        No-op for tournaments that are no longer waiting, so a late or
        duplicate firing changes nothing.
        """
        async with self._locks.hold(tournament_id):
            tournament = await self._store.get(tournament_id)
            if tournament is None:
                logger.warning(f"Fill deadline fired for missing tournament {tournament_id}")
                return None
            if tournament.status != TournamentStatus.WAITING:
                logger.debug(f"Ignoring stale fill for tournament {tournament_id} ({tournament.status.value})")
                return tournament

            missing = self._size - len(tournament.participants)
            bots = make_bots(tournament_id, missing) if missing > 0 else []
            updated = await self._start(
                tournament.model_copy(update={"participants": tournament.participants + bots})
            )

        logger.info(f"Tournament {tournament_id} filled with {len(bots)} bots")
        await self._after_start(updated)
        return updated

    async def start_now(self, tournament_id: str, user_id: str) -> Tournament:
        """Host-only: skip the rest of the wait and fill with bots now."""
        tournament = await self.get_tournament(tournament_id)
        if tournament.host_id != user_id:
            raise TournamentHostOnlyError(tournament_id, user_id)
        if tournament.status != TournamentStatus.WAITING:
            raise TournamentNotActiveError(
                tournament_id, tournament.status.value, TournamentStatus.WAITING.value
            )

        self._scheduler.cancel(fill_timer_label(tournament_id))
        started = await self.on_fill_deadline(tournament_id)
        return started if started is not None else await self.get_tournament(tournament_id)

    async def disband(self, tournament_id: str, user_id: str) -> Tournament:
        """Host-only: cancel a waiting tournament. Its fill timer is cancelled too."""
        async with self._locks.hold(tournament_id):
            tournament = await self.get_tournament(tournament_id)
            if tournament.host_id != user_id:
                raise TournamentHostOnlyError(tournament_id, user_id)
            if tournament.status != TournamentStatus.WAITING:
                raise TournamentNotActiveError(
                    tournament_id, tournament.status.value, TournamentStatus.WAITING.value
                )

            self._scheduler.cancel(fill_timer_label(tournament_id))
            updated = await self._store.update(
                tournament_id,
                {"status": TournamentStatus.CANCELLED, "completed_at": self._clock()},
                expected_version=tournament.version,
            )

        logger.info(f"Tournament {tournament_id} disbanded by host")
        return updated

    async def resume_pending(self) -> int:
        """
        Re-arm fill timers for waiting tournaments from their stored deadline.

        Deadlines that passed while the process was down fire immediately.
        """
        waiting = await self._store.query(where={"status": TournamentStatus.WAITING})
        for tournament in waiting:
            self._arm_fill_timer(tournament)
        if waiting:
            logger.info(f"Resumed fill timers for {len(waiting)} tournaments")
        return len(waiting)

    async def record_match_result(
        self,
        tournament_id: str,
        round_number: int,
        match_index: int,
        winner_id: str,
        score1: int = 0,
        score2: int = 0,
    ) -> Tournament:
        """
        Complete a match in the current round and advance the bracket.

        Raises:
            TournamentNotFoundError: If the tournament does not exist
            TournamentNotActiveError: If it is not in progress
            InvalidMatchResultError: If the match is not in the current round,
                is already completed, or the winner did not play in it
        """
        async with self._locks.hold(tournament_id):
            tournament = await self.get_tournament(tournament_id)
            if tournament.status != TournamentStatus.IN_PROGRESS:
                raise TournamentNotActiveError(
                    tournament_id, tournament.status.value, TournamentStatus.IN_PROGRESS.value
                )

            current = tournament.current_round
            if current is None or current.round_number != round_number:
                raise InvalidMatchResultError(tournament_id, f"round {round_number} is not the current round")
            if not 0 <= match_index < len(current.matches):
                raise InvalidMatchResultError(tournament_id, f"no match {match_index} in round {round_number}")

            match = current.matches[match_index]
            if match.is_completed:
                raise InvalidMatchResultError(tournament_id, f"match {match_index} is already completed")
            if match.is_bye or not match.involves(winner_id):
                raise InvalidMatchResultError(tournament_id, f"{winner_id} did not play match {match_index}")

            matches = list(current.matches)
            matches[match_index] = match.model_copy(
                update={
                    "winner": winner_id,
                    "score1": score1,
                    "score2": score2,
                    "status": MatchStatus.COMPLETED,
                }
            )
            rounds = tournament.rounds[:-1] + [current.model_copy(update={"matches": matches})]
            participants, rounds, champion = advance_bracket(tournament.participants, rounds, self._rng)

            changes: dict = {"participants": participants, "rounds": rounds}
            if champion is not None:
                changes["status"] = TournamentStatus.COMPLETED
                changes["winner"] = champion
                changes["completed_at"] = self._clock()

            updated = await self._store.update(tournament_id, changes, expected_version=tournament.version)

        logger.debug(f"Tournament {tournament_id} round {round_number} match {match_index}: {winner_id} won")
        if updated.status == TournamentStatus.COMPLETED:
            await self._after_complete(updated)
        return updated

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _start(self, tournament: Tournament) -> Tournament:
        """Write the in-progress transition with round 1. Caller holds the lock."""
        ids = [participant.user_id for participant in tournament.participants]
        rounds = [pair_players(ids, 1)]
        participants, rounds, champion = advance_bracket(tournament.participants, rounds, self._rng)

        changes: dict = {
            "participants": participants,
            "rounds": rounds,
            "status": TournamentStatus.IN_PROGRESS,
            "started_at": self._clock(),
        }
        if champion is not None:
            changes["status"] = TournamentStatus.COMPLETED
            changes["winner"] = champion
            changes["completed_at"] = self._clock()

        # Version of the stored document, not of the in-memory copy.
        return await self._store.update(tournament.id, changes, expected_version=tournament.version)

    async def _after_start(self, tournament: Tournament) -> None:
        logger.info(f"Tournament {tournament.id} started with {len(tournament.participants)} participants")
        if self._notifications is not None:
            for participant in tournament.humans:
                await self._notifications.send_tournament_start(participant.user_id, tournament.id)
        if tournament.status == TournamentStatus.COMPLETED:
            await self._after_complete(tournament)

    async def _after_complete(self, tournament: Tournament) -> None:
        logger.info(f"Tournament {tournament.id} completed, champion {tournament.winner}")
        champion = tournament.get_participant(tournament.winner) if tournament.winner else None
        if champion is None or champion.is_bot or self._stats is None:
            return
        await self._stats.record_tournament_win(champion.user_id)

    async def _participant(self, user_id: str) -> TournamentPlayer:
        if self._profiles is None:
            return TournamentPlayer(user_id=user_id)
        user = await self._profiles.get(user_id)
        if user is None:
            return TournamentPlayer(user_id=user_id)
        return TournamentPlayer(user_id=user_id, display_name=user.display_name, photo_url=user.photo_url)

    def _arm_fill_timer(self, tournament: Tournament) -> None:
        async def on_deadline() -> None:
            await self.on_fill_deadline(tournament.id)

        self._scheduler.schedule_at(fill_timer_label(tournament.id), tournament.fill_deadline, on_deadline)
