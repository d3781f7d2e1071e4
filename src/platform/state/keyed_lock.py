"""
Keyed Lock

In-process mutual exclusion per key (e.g. one lock per event id).
Different keys never contend with each other; there is no global lock.
"""

from collections.abc import AsyncIterator, Hashable
from contextlib import asynccontextmanager
from typing import Optional

import anyio

from src.platform.logging.loguru_io import Logger


class KeyedLock:
    """
    Registry of anyio locks, created on first use and dropped once nobody holds
    or waits for them.
    """

    def __init__(self) -> None:
        self._locks: dict[Hashable, anyio.Lock] = {}
        self._users: dict[Hashable, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    def locked(self, key: Hashable) -> bool:
        lock = self._locks.get(key)
        return lock is not None and lock.locked()

    @asynccontextmanager
    async def hold(self, key: Hashable, *, timeout: Optional[float] = None) -> AsyncIterator[None]:
        """
        Hold the lock for `key` for the duration of the block.

        Args:
            key: Lock key (e.g., an event id)
            timeout: Max seconds to wait for the lock; None waits forever

        Raises:
            TimeoutError: the lock could not be acquired within `timeout`
        """
        lock = self._locks.setdefault(key, anyio.Lock())
        self._users[key] = self._users.get(key, 0) + 1

        try:
            with anyio.fail_after(timeout):
                await lock.acquire()
        except BaseException:
            self._discard(key)
            raise

        Logger.base.debug(f'🔒 [LOCK] Acquired lock: {key}')
        try:
            yield
        finally:
            lock.release()
            self._discard(key)
            Logger.base.debug(f'🔓 [LOCK] Released lock: {key}')

    def _discard(self, key: Hashable) -> None:
        remaining = self._users[key] - 1
        if remaining:
            self._users[key] = remaining
        else:
            del self._users[key]
            del self._locks[key]
