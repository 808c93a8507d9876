"""Redis module.

Provides the reference ``CacheStore`` used for token revocation markers.
"""

from typing import Self

import redis.asyncio as aioredis


class RedisCacheStore:
    """Revocation cache backed by Redis.

    Usage:
        ```python
        cache = RedisCacheStore.from_url(settings.redis_url)
        await cache.set("auth:blacklist:<jti>", "1", ttl_seconds=300)
        ```
    """

    def __init__(self, redis: aioredis.Redis) -> None:
        """Initialize cache store with Redis client.

        Args:
            redis: Redis client. Should decode responses to ``str``.
        """
        self._redis = redis

    @classmethod
    def from_url(cls, url: str) -> Self:
        """Build a cache store with its own client for the given URL."""
        return cls(aioredis.from_url(url, decode_responses=True))

    async def get(self, key: str) -> str | None:
        value = await self._redis.get(key)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        """Store a value; ``ttl_seconds=None`` stores it without expiry."""
        await self._redis.set(key, value, ex=ttl_seconds)

    async def delete(self, key: str) -> None:
        await self._redis.delete(key)
