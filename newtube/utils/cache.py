"""Redis connection shared by the reference-data cache and the rate limiter.

Values are stored as JSON with a TTL. Cache misses and Redis outages both
fall through to the database.
"""

import json
from datetime import timedelta
from typing import Any

import redis.asyncio as redis

from newtube.config import get_settings
from newtube.utils.logging import get_logger

logger = get_logger(__name__)
settings = get_settings()

CACHE_TTL_DEFAULT = timedelta(minutes=5)


class RedisCache:
    """Async Redis client with JSON serialization."""

    def __init__(self) -> None:
        self._client: redis.Redis | None = None
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    async def get_client(self) -> redis.Redis:
        """Get or create Redis client."""
        if self._client is None:
            self._client = redis.from_url(
                str(settings.redis_url),
                encoding="utf-8",
                decode_responses=True,
            )
        return self._client

    async def connect(self) -> bool:
        """Test Redis connection."""
        try:
            client = await self.get_client()
            await client.ping()
            self._connected = True
            return True
        except Exception as e:
            logger.warning(f"Redis unavailable: {e}")
            self._connected = False
            return False

    async def ping(self) -> bool:
        """Ping Redis to check connection health."""
        client = await self.get_client()
        return await client.ping()

    async def close(self) -> None:
        """Close Redis connection."""
        if self._client:
            await self._client.aclose()
            self._client = None
            self._connected = False

    async def get(self, key: str) -> Any | None:
        """Get value from cache.

        Returns:
            Cached value or None if not found/expired
        """
        if not self._connected:
            return None

        try:
            client = await self.get_client()
            data = await client.get(key)
            if data:
                return json.loads(data)
            return None
        except Exception as e:
            logger.debug(f"Cache get error for {key}: {e}")
            return None

    async def set(self, key: str, value: Any, ttl: timedelta | None = None) -> bool:
        """Set value in cache (must be JSON serializable)."""
        if not self._connected:
            return False

        try:
            client = await self.get_client()
            serialized = json.dumps(value, default=str)
            expire_seconds = int((ttl or CACHE_TTL_DEFAULT).total_seconds())
            await client.setex(key, expire_seconds, serialized)
            return True
        except Exception as e:
            logger.debug(f"Cache set error for {key}: {e}")
            return False


# Global cache instance
cache = RedisCache()
