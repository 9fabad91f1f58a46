"""Tests for shared/locks.py."""

import asyncio
import pytest

from shared.locks import KeyedLock


class TestKeyedLock:
    @pytest.mark.asyncio
    async def test_same_key_is_serialized(self):
        locks = KeyedLock()
        events = []

        async def worker(name: str):
            async with locks.hold("room-1"):
                events.append(f"{name}-start")
                await asyncio.sleep(0.01)
                events.append(f"{name}-end")

        await asyncio.gather(worker("a"), worker("b"))

        assert events in (
            ["a-start", "a-end", "b-start", "b-end"],
            ["b-start", "b-end", "a-start", "a-end"],
        )

    @pytest.mark.asyncio
    async def test_different_keys_do_not_block(self):
        locks = KeyedLock()
        async with locks.hold("room-1"):
            # Would deadlock if keys shared a lock.
            await asyncio.wait_for(self._hold(locks, "room-2"), timeout=1)

    @pytest.mark.asyncio
    async def test_is_locked_and_cleanup(self):
        locks = KeyedLock()
        async with locks.hold("room-1"):
            assert locks.is_locked("room-1")
            assert len(locks) == 1
        assert not locks.is_locked("room-1")
        assert len(locks) == 0

    @pytest.mark.asyncio
    async def test_released_on_error(self):
        locks = KeyedLock()
        with pytest.raises(ValueError):
            async with locks.hold("room-1"):
                raise ValueError("boom")
        assert not locks.is_locked("room-1")

    async def _hold(self, locks: KeyedLock, key: str):
        async with locks.hold(key):
            return True
