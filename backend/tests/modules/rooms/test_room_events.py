"""Tests for the room SSE event generator."""

import json

import pytest

from modules.rooms.models import GameRoom, RoomStatus
from modules.rooms.routes import room_event_generator
from modules.rooms.service import RoomService
from modules.words.board import BoardGenerator
from modules.words.lexicon import Lexicon
from modules.words.scorer import WordScorer
from shared.store import InMemoryDocumentStore


@pytest.fixture
def store() -> InMemoryDocumentStore[GameRoom]:
    return InMemoryDocumentStore(GameRoom, "game_rooms")


@pytest.fixture
def service(store, clock, rng) -> RoomService:
    return RoomService(
        store,
        WordScorer(Lexicon(["PENCERE"])),
        BoardGenerator(rng=rng),
        clock=clock,
        rng=rng,
    )


class TestRoomEventGenerator:
    @pytest.mark.asyncio
    async def test_streams_until_finished(self, service, store):
        room = await service.create_room("alice", max_points=10)
        events = room_event_generator(room.id, service)

        first = await events.__anext__()
        assert first["event"] == "room"
        assert json.loads(first["data"])["status"] == RoomStatus.WAITING.value

        await service.join_room(room.code, "bob")
        await service.set_ready(room.id, "alice")
        await service.set_ready(room.id, "bob")
        await service.submit_word(room.id, "alice", "PENCERE")

        statuses = []
        async for event in events:
            statuses.append(json.loads(event["data"])["status"])

        assert statuses[-1] == RoomStatus.FINISHED.value
        assert len(statuses) == 4
        assert store._subscribers.subscriber_count(room.id) == 0

    @pytest.mark.asyncio
    async def test_finished_room_yields_once(self, service):
        room = await service.create_room("alice", max_points=10)
        await service.join_room(room.code, "bob")
        await service.set_ready(room.id, "alice")
        await service.set_ready(room.id, "bob")
        await service.submit_word(room.id, "alice", "PENCERE")

        events = [event async for event in room_event_generator(room.id, service)]

        assert len(events) == 1
        assert json.loads(events[0]["data"])["winner"] == "alice"
