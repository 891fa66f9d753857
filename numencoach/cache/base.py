import time
from typing import Any, Callable, Dict, Optional, Tuple

import redis.asyncio as redis

from numencoach.cache.redis import decode_value, encode_value, get_redis
from numencoach.config import settings


class BaseCache:
    """
    Base cache abstraction.

    Values must be JSON-serialisable. All cache implementations
    should extend this class.
    """

    async def get(self, key: str) -> Optional[Any]:
        """
        Get value from cache.
        Returns None if key does not exist.
        """
        raise NotImplementedError

    async def set(self, key: str, value: Any, ttl: int) -> None:
        """
        Set value in cache with TTL (seconds).
        """
        raise NotImplementedError

    async def delete(self, key: str) -> None:
        raise NotImplementedError

    async def exists(self, key: str) -> bool:
        return await self.get(key) is not None


class MemoryCache(BaseCache):
    """
    Process-local TTL cache.

    Entries expire on read, and expired entries are purged from `set`
    at most once every `purge_interval` seconds. The clock is injectable
    for tests.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        purge_interval: Optional[float] = None,
    ):
        self._clock = clock
        self.purge_interval = (
            purge_interval
            if purge_interval is not None
            else settings.CACHE_PURGE_INTERVAL
        )
        self._entries: Dict[str, Tuple[float, str]] = {}
        self._next_purge = clock() + self.purge_interval

    async def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None

        return decode_value(value)

    async def set(self, key: str, value: Any, ttl: int) -> None:
        now = self._clock()
        if now >= self._next_purge:
            self._purge(now)

        # Stored encoded so both backends hand back equal values
        self._entries[key] = (now + ttl, encode_value(value))

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)

    def _purge(self, now: float) -> None:
        self._entries = {
            key: entry for key, entry in self._entries.items() if entry[0] > now
        }
        self._next_purge = now + self.purge_interval


class RedisCache(BaseCache):
    """
    Shared cache backed by redis.asyncio.
    """

    def __init__(self, client: Optional[redis.Redis] = None):
        self.client = client or get_redis()

    async def get(self, key: str) -> Optional[Any]:
        value = await self.client.get(key)
        if value is None:
            return None
        return decode_value(value)

    async def set(self, key: str, value: Any, ttl: int) -> None:
        await self.client.setex(key, ttl, encode_value(value))

    async def delete(self, key: str) -> None:
        await self.client.delete(key)

    async def exists(self, key: str) -> bool:
        return bool(await self.client.exists(key))


def build_cache(backend: Optional[str] = None) -> BaseCache:
    """
    Cache for the configured CACHE_BACKEND ("memory" or "redis").
    """
    backend = (backend or settings.CACHE_BACKEND).lower()

    if backend == "redis":
        return RedisCache()
    if backend == "memory":
        return MemoryCache()

    raise ValueError(f"Unknown cache backend: {backend}")
