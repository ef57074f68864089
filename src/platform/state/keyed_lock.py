"""
Per-key asyncio locks.

One lock per key (library id) so that read-modify-write sequences on the same
library never interleave, while different libraries proceed independently.
Single-process only; multi-process deployments need a Kvrocks SET NX lock per
library instead. Entries live only while some task holds or awaits the key,
so arbitrary client-supplied ids do not accumulate.
"""

import asyncio
from collections.abc import AsyncIterator, Iterable
from contextlib import AsyncExitStack, asynccontextmanager

from src.platform.logging.loguru_io import Logger


class KeyedAsyncLock:
    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        # Holders plus waiters per key; an entry is dropped when this reaches 0
        self._users: dict[str, int] = {}

    def _lock_for(self, key: str) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        self._users[key] = self._users.get(key, 0) + 1
        return lock

    def _release_user(self, key: str) -> None:
        remaining = self._users[key] - 1
        if remaining:
            self._users[key] = remaining
        else:
            del self._users[key]
            del self._locks[key]

    @property
    def tracked_keys(self) -> int:
        return len(self._locks)

    def is_locked(self, key: str) -> bool:
        lock = self._locks.get(key)
        return bool(lock and lock.locked())

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock = self._lock_for(key)
        if lock.locked():
            Logger.base.debug(f'⏳ [LOCK] Waiting for {key}')
        try:
            async with lock:
                yield
        finally:
            self._release_user(key)

    @asynccontextmanager
    async def hold_many(self, keys: Iterable[str]) -> AsyncIterator[None]:
        """Acquire several keys in sorted order so two callers never deadlock"""
        async with AsyncExitStack() as stack:
            for key in sorted(set(keys)):
                await stack.enter_async_context(self.hold(key))
            yield
