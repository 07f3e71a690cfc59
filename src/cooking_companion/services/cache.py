"""Expiring cache for catalog reference data."""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol


class ReferenceCache(Protocol):
    """Cache interface for recipes and ingredient groups."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a value for ``ttl_seconds``."""


@dataclass
class _Entry:
    value: object
    expires_at: float


@dataclass
class InMemoryReferenceCache(ReferenceCache):
    """Process-local cache; entries expire on a monotonic clock."""

    clock: Callable[[], float] = time.monotonic
    _entries: dict[str, _Entry] = field(default_factory=dict)

    def get(self, key: str) -> object | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self.clock() >= entry.expires_at:
            del self._entries[key]
            return None
        return entry.value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            self._entries.pop(key, None)
            return
        self._entries[key] = _Entry(value=value, expires_at=self.clock() + ttl_seconds)
