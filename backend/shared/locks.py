"""
Per-key mutual exclusion for read-modify-write sequences.

Room, tournament and user documents are read, changed in memory and written
back. Every such sequence for a given id runs under the lock for that id, so
two submissions to the same room are applied one after the other.
"""

from collections import defaultdict
from contextlib import asynccontextmanager
from typing import AsyncIterator
import asyncio


class KeyedLock:
    """
    Hands out one asyncio.Lock per key.

    Locks are created on first use and dropped once nobody holds or waits
    for them. Not reentrant: a coroutine must not hold the same key twice.

    Example:
        locks = KeyedLock()
        async with locks.hold(room_id):
            room = await store.get(room_id)
            ...
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._refs: dict[str, int] = defaultdict(int)

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        """Acquire the lock for ``key`` for the duration of the block."""
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        self._refs[key] += 1
        try:
            async with lock:
                yield
        finally:
            self._refs[key] -= 1
            if self._refs[key] == 0:
                del self._refs[key]
                self._locks.pop(key, None)

    def is_locked(self, key: str) -> bool:
        """Whether some coroutine currently holds ``key``."""
        lock = self._locks.get(key)
        return lock is not None and lock.locked()

    def __len__(self) -> int:
        return len(self._locks)
