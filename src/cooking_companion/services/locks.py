"""Per-user locks serialising writes to session state."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from uuid import UUID


@dataclass
class UserLocks:
    """In-process registry of one asyncio lock per user."""

    _locks: dict[UUID, asyncio.Lock]
    _holders: dict[UUID, int]

    def __init__(self) -> None:
        self._locks = {}
        self._holders = {}

    @asynccontextmanager
    async def hold(self, user_id: UUID) -> AsyncIterator[None]:
        """Hold the user's lock for the duration of the block."""
        lock = self._locks.setdefault(user_id, asyncio.Lock())
        self._holders[user_id] = self._holders.get(user_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._holders[user_id] -= 1
            if self._holders[user_id] == 0:
                self._holders.pop(user_id)
                self._locks.pop(user_id, None)

    def is_held(self, user_id: UUID) -> bool:
        """Return true while some request holds or waits on the user's lock."""
        return user_id in self._holders
