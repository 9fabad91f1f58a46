"""Tests for the background life regeneration poller."""

import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from modules.lives.poller import LifeRegenerationPoller
from modules.lives.service import LivesService
from modules.users.exceptions import UserNotFoundError


class TestRunOnce:
    @pytest.mark.asyncio
    async def test_refreshes_tracked_users(self, profiles, clock):
        await profiles.upsert("alice", {"lives": 0, "last_life_regeneration": clock()})
        poller = LifeRegenerationPoller(LivesService(profiles, clock=clock))
        poller.track("alice")
        clock.advance(minutes=30)

        assert await poller.run_once() == 1
        assert (await profiles.get("alice")).lives == 1

    @pytest.mark.asyncio
    async def test_unknown_users_are_dropped(self, profiles, clock):
        poller = LifeRegenerationPoller(LivesService(profiles, clock=clock))
        poller.track("alice")
        poller.track("ghost")

        assert await poller.run_once() == 1
        assert poller.tracked == frozenset({"alice"})

    @pytest.mark.asyncio
    async def test_other_failures_keep_tracking(self):
        lives = AsyncMock()
        lives.refresh.side_effect = RuntimeError("store down")
        poller = LifeRegenerationPoller(lives)
        poller.track("alice")

        assert await poller.run_once() == 0
        assert "alice" in poller.tracked

    def test_untrack(self):
        poller = LifeRegenerationPoller(AsyncMock())
        poller.track("alice")
        poller.untrack("alice")
        poller.untrack("alice")

        assert poller.tracked == frozenset()


class TestIdleExpiry:
    @pytest.mark.asyncio
    async def test_idle_users_stop_being_polled(self, clock):
        lives = AsyncMock()
        poller = LifeRegenerationPoller(lives, idle_after=timedelta(minutes=30), clock=clock)
        poller.track("alice")
        clock.advance(minutes=20)
        poller.track("bob")
        clock.advance(minutes=15)

        assert await poller.run_once() == 1
        assert poller.tracked == frozenset({"bob"})
        lives.refresh.assert_awaited_once_with("bob")

    def test_track_refreshes_last_seen(self, clock):
        poller = LifeRegenerationPoller(AsyncMock(), idle_after=timedelta(minutes=30), clock=clock)
        poller.track("alice")
        clock.advance(minutes=25)
        poller.track("alice")
        clock.advance(minutes=25)

        assert poller.expire_idle() == 0
        assert poller.tracked == frozenset({"alice"})

        clock.advance(minutes=10)
        assert poller.expire_idle() == 1
        assert poller.tracked == frozenset()


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_start_and_stop(self):
        lives = AsyncMock()
        poller = LifeRegenerationPoller(lives, interval_seconds=0.01)
        poller.track("alice")

        poller.start()
        assert poller.running
        await asyncio.sleep(0.05)
        await poller.stop()

        assert not poller.running
        assert lives.refresh.await_count >= 1

    @pytest.mark.asyncio
    async def test_stop_without_start_is_noop(self):
        poller = LifeRegenerationPoller(AsyncMock())

        await poller.stop()

        assert not poller.running
