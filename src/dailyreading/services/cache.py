"""Process-lifetime cache for resolved essay readings."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Protocol

import structlog

from dailyreading.models import Reading

logger = structlog.get_logger(__name__)


class ReadingCache(Protocol):
    """Protocol for key -> Reading stores used by the essay fetcher."""

    def get(self, key: str) -> Reading | None:
        ...

    def put_if_absent(self, key: str, reading: Reading) -> Reading:
        ...

    async def get_or_create(
        self, key: str, factory: Callable[[], Awaitable[Reading]]
    ) -> Reading:
        ...


class InMemoryReadingCache:
    """Never-evicting dict cache with one in-flight fetch per key.

    Expiry is left to whoever owns the cache instance: dropping it (or
    calling ``clear``) is the revalidation boundary.
    """

    def __init__(self) -> None:
        self._entries: dict[str, Reading] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def get(self, key: str) -> Reading | None:
        return self._entries.get(key)

    def put_if_absent(self, key: str, reading: Reading) -> Reading:
        """Store ``reading`` unless ``key`` is already cached; return the cached value."""
        return self._entries.setdefault(key, reading)

    async def get_or_create(
        self, key: str, factory: Callable[[], Awaitable[Reading]]
    ) -> Reading:
        cached = self._entries.get(key)
        if cached is not None:
            logger.debug("cache.hit", key=key)
            return cached
        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            cached = self._entries.get(key)
            if cached is not None:
                logger.debug("cache.hit_after_wait", key=key)
                return cached
            logger.debug("cache.miss", key=key)
            reading = await factory()
            stored = self.put_if_absent(key, reading)
        self._locks.pop(key, None)
        return stored

    def clear(self) -> None:
        self._entries.clear()
        self._locks.clear()
