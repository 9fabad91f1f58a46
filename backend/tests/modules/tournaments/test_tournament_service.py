"""Tests for the Tournament Manager."""

import asyncio
from datetime import timedelta

import pytest

from modules.notifications import (
    InMemoryNotificationScheduler,
    NotificationService,
    tournament_start_label,
)
from modules.tournaments.exceptions import (
    InvalidMatchResultError,
    TournamentFullError,
    TournamentHostOnlyError,
    TournamentNotActiveError,
    TournamentNotFoundError,
    TournamentNotJoinableError,
)
from modules.tournaments.interfaces import ITournamentService
from modules.tournaments.models import MatchStatus, Tournament, TournamentPlayer, TournamentStatus
from modules.tournaments.service import TournamentService, fill_timer_label
from modules.users.service import UserService
from shared.scheduler import DeadlineScheduler
from shared.store import InMemoryDocumentStore


@pytest.fixture
def store() -> InMemoryDocumentStore[Tournament]:
    return InMemoryDocumentStore(Tournament, "tournaments")


@pytest.fixture
def push(clock) -> InMemoryNotificationScheduler:
    return InMemoryNotificationScheduler(clock=clock)


def make_service(store, scheduler, profiles, push, clock, rng) -> TournamentService:
    return TournamentService(
        store,
        scheduler,
        profiles=profiles,
        notifications=NotificationService(push),
        stats=UserService(profiles, clock=clock),
        rng=rng,
        clock=clock,
    )


@pytest.fixture
def scheduler(clock) -> DeadlineScheduler:
    return DeadlineScheduler(clock=clock)


@pytest.fixture
def service(store, scheduler, profiles, push, clock, rng) -> TournamentService:
    return make_service(store, scheduler, profiles, push, clock, rng)


async def finish_for(service: TournamentService, tournament: Tournament, user_id: str) -> Tournament:
    """Report wins for user_id until the tournament ends."""
    while tournament.status == TournamentStatus.IN_PROGRESS:
        current = tournament.current_round
        index = next(i for i, m in enumerate(current.matches) if m.involves(user_id) and not m.is_completed)
        tournament = await service.record_match_result(tournament.id, current.round_number, index, user_id, 80, 40)
    return tournament


class TestCreateAndJoin:
    def test_implements_interface(self, service):
        assert isinstance(service, ITournamentService)

    @pytest.mark.asyncio
    async def test_create_arms_fill_timer(self, service, scheduler, clock):
        tournament = await service.create_tournament("alice")

        assert tournament.status == TournamentStatus.WAITING
        assert tournament.fill_deadline == clock() + timedelta(seconds=30)
        assert [p.user_id for p in tournament.participants] == ["alice"]
        assert tournament.participants[0].display_name == "Alice"
        assert scheduler.is_scheduled(fill_timer_label(tournament.id))
        await scheduler.shutdown()

    @pytest.mark.asyncio
    async def test_get_missing_raises(self, service):
        with pytest.raises(TournamentNotFoundError):
            await service.get_tournament("nope")

    @pytest.mark.asyncio
    async def test_join_is_idempotent(self, service, scheduler):
        tournament = await service.create_tournament("alice")

        await service.join_tournament(tournament.id, "bob")
        again = await service.join_tournament(tournament.id, "bob")

        assert [p.user_id for p in again.participants] == ["alice", "bob"]
        await scheduler.shutdown()

    @pytest.mark.asyncio
    async def test_filling_last_slot_starts(self, service, scheduler, push):
        tournament = await service.create_tournament("alice")
        for i in range(7):
            tournament = await service.join_tournament(tournament.id, f"user{i}")

        assert tournament.status == TournamentStatus.IN_PROGRESS
        assert len(tournament.rounds[0].matches) == 4
        assert not scheduler.is_scheduled(fill_timer_label(tournament.id))
        assert push.get(tournament_start_label("alice", tournament.id)) is not None

    @pytest.mark.asyncio
    async def test_join_started_tournament_rejected(self, service):
        tournament = await service.create_tournament("alice")
        await service.start_now(tournament.id, "alice")

        with pytest.raises(TournamentNotJoinableError):
            await service.join_tournament(tournament.id, "bob")

    @pytest.mark.asyncio
    async def test_join_full_waiting_tournament_rejected(self, service, store, clock):
        packed = Tournament(
            id="packed",
            host_id="h",
            participants=[TournamentPlayer(user_id=f"p{i}") for i in range(8)],
            fill_deadline=clock() + timedelta(seconds=30),
        )
        await store.create(packed)

        with pytest.raises(TournamentFullError):
            await service.join_tournament("packed", "bob")

    @pytest.mark.asyncio
    async def test_list_open_tournaments(self, service, scheduler):
        open_one = await service.create_tournament("alice")
        started = await service.create_tournament("bob")
        await service.start_now(started.id, "bob")

        listed = await service.list_open_tournaments()

        assert [t.id for t in listed] == [open_one.id]
        await scheduler.shutdown()


class TestFillDeadline:
    @pytest.mark.asyncio
    async def test_fill_adds_bots_and_pairs_round_one(self, service, push, scheduler):
        tournament = await service.create_tournament("alice")
        await service.join_tournament(tournament.id, "bob")

        started = await service.on_fill_deadline(tournament.id)

        assert started.status == TournamentStatus.IN_PROGRESS
        assert len(started.participants) == 8
        assert sum(p.is_bot for p in started.participants) == 6
        assert len(started.rounds) == 1
        assert len(started.rounds[0].matches) == 4
        first = started.rounds[0].matches[0]
        assert (first.player1, first.player2) == ("alice", "bob")
        assert all(m.is_completed for m in started.rounds[0].matches[1:])
        assert push.get(tournament_start_label("bob", tournament.id)) is not None
        await scheduler.shutdown()

    @pytest.mark.asyncio
    async def test_fill_is_noop_after_start(self, service, scheduler):
        tournament = await service.create_tournament("alice")
        started = await service.on_fill_deadline(tournament.id)

        again = await service.on_fill_deadline(tournament.id)

        assert again.version == started.version
        await scheduler.shutdown()

    @pytest.mark.asyncio
    async def test_fill_for_missing_tournament(self, service):
        assert await service.on_fill_deadline("nope") is None

    @pytest.mark.asyncio
    async def test_timer_fires_fill(self, store, profiles, push, clock, rng):
        ahead = DeadlineScheduler(clock=lambda: clock() + timedelta(minutes=1))
        service = make_service(store, ahead, profiles, push, clock, rng)

        tournament = await service.create_tournament("alice")
        await asyncio.sleep(0.05)

        assert (await service.get_tournament(tournament.id)).status == TournamentStatus.IN_PROGRESS

    @pytest.mark.asyncio
    async def test_disband_prevents_fill(self, store, profiles, push, clock, rng):
        ahead = DeadlineScheduler(clock=lambda: clock() + timedelta(minutes=1))
        service = make_service(store, ahead, profiles, push, clock, rng)

        tournament = await service.create_tournament("alice")
        disbanded = await service.disband(tournament.id, "alice")
        await asyncio.sleep(0.05)

        assert disbanded.status == TournamentStatus.CANCELLED
        stored = await service.get_tournament(tournament.id)
        assert stored.status == TournamentStatus.CANCELLED
        assert stored.rounds == []

    @pytest.mark.asyncio
    async def test_resume_pending_rearms(self, store, profiles, push, clock, rng, scheduler):
        first = make_service(store, scheduler, profiles, push, clock, rng)
        tournament = await first.create_tournament("alice")
        await scheduler.shutdown()

        restarted_timers = DeadlineScheduler(clock=clock)
        restarted = make_service(store, restarted_timers, profiles, push, clock, rng)

        assert await restarted.resume_pending() == 1
        assert restarted_timers.is_scheduled(fill_timer_label(tournament.id))
        await restarted_timers.shutdown()


class TestHostActions:
    @pytest.mark.asyncio
    async def test_only_host_can_start(self, service, scheduler):
        tournament = await service.create_tournament("alice")
        await service.join_tournament(tournament.id, "bob")

        with pytest.raises(TournamentHostOnlyError):
            await service.start_now(tournament.id, "bob")
        await scheduler.shutdown()

    @pytest.mark.asyncio
    async def test_start_now_cancels_timer(self, service, scheduler):
        tournament = await service.create_tournament("alice")

        started = await service.start_now(tournament.id, "alice")

        assert started.status == TournamentStatus.IN_PROGRESS
        assert not scheduler.is_scheduled(fill_timer_label(tournament.id))

    @pytest.mark.asyncio
    async def test_start_twice_rejected(self, service):
        tournament = await service.create_tournament("alice")
        await service.start_now(tournament.id, "alice")

        with pytest.raises(TournamentNotActiveError):
            await service.start_now(tournament.id, "alice")

    @pytest.mark.asyncio
    async def test_only_host_can_disband(self, service, scheduler):
        tournament = await service.create_tournament("alice")

        with pytest.raises(TournamentHostOnlyError):
            await service.disband(tournament.id, "bob")
        await scheduler.shutdown()

    @pytest.mark.asyncio
    async def test_cannot_disband_started(self, service):
        tournament = await service.create_tournament("alice")
        await service.start_now(tournament.id, "alice")

        with pytest.raises(TournamentNotActiveError):
            await service.disband(tournament.id, "alice")


class TestMatchResults:
    @pytest.mark.asyncio
    async def test_human_wins_through_to_champion(self, service, profiles):
        tournament = await service.create_tournament("alice")
        tournament = await service.start_now(tournament.id, "alice")

        finished = await finish_for(service, tournament, "alice")

        assert finished.status == TournamentStatus.COMPLETED
        assert finished.winner == "alice"
        assert [len(r.matches) for r in finished.rounds] == [4, 2, 1]
        assert finished.completed_at is not None
        alice = await profiles.get("alice")
        assert alice.tournaments_won == 1
        assert alice.has_badge("tournament_winner")

    @pytest.mark.asyncio
    async def test_bot_beating_last_human_finishes_bracket(self, service, profiles):
        tournament = await service.create_tournament("alice")
        tournament = await service.start_now(tournament.id, "alice")
        opponent = tournament.rounds[0].matches[0].player2

        finished = await service.record_match_result(tournament.id, 1, 0, opponent, 30, 60)

        assert finished.status == TournamentStatus.COMPLETED
        assert finished.get_participant(finished.winner).is_bot
        assert finished.get_participant("alice").eliminated
        assert (await profiles.get("alice")).tournaments_won == 0

    @pytest.mark.asyncio
    async def test_two_humans_meet_in_round_one(self, service):
        tournament = await service.create_tournament("alice")
        await service.join_tournament(tournament.id, "bob")
        tournament = await service.start_now(tournament.id, "alice")

        updated = await service.record_match_result(tournament.id, 1, 0, "bob", 10, 20)

        assert updated.rounds[0].matches[0].status == MatchStatus.COMPLETED
        assert updated.get_participant("alice").eliminated
        assert len(updated.rounds) == 2
        assert updated.rounds[1].matches[0].player1 == "bob"

    @pytest.mark.asyncio
    async def test_invalid_results(self, service):
        tournament = await service.create_tournament("alice")
        tournament = await service.start_now(tournament.id, "alice")

        with pytest.raises(InvalidMatchResultError):
            await service.record_match_result(tournament.id, 2, 0, "alice")
        with pytest.raises(InvalidMatchResultError):
            await service.record_match_result(tournament.id, 1, 9, "alice")
        with pytest.raises(InvalidMatchResultError):
            await service.record_match_result(tournament.id, 1, 1, "alice")
        with pytest.raises(InvalidMatchResultError):
            await service.record_match_result(tournament.id, 1, 0, "carol")

    @pytest.mark.asyncio
    async def test_result_for_waiting_tournament_rejected(self, service, scheduler):
        tournament = await service.create_tournament("alice")

        with pytest.raises(TournamentNotActiveError):
            await service.record_match_result(tournament.id, 1, 0, "alice")
        await scheduler.shutdown()
