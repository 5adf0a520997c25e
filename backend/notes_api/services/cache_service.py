"""
Notes API — Redis Cache Backend
================================

What:  CacheBackend implementation over redis.asyncio.
Why:   Redis is shared by every worker process, so an invalidation issued by
       one worker is seen by all of them.
How:   One client per process (connection pool inside), created in the app
       lifespan. Logical keys are prefixed with settings.cache_key_prefix.

Connection States:
    The client is created in connect() and kept even when the startup PING
    fails: redis-py connects lazily, so every later command either reaches a
    recovered Redis or raises CacheError. Without a client (before connect()
    or after close()) every command raises CacheError as well.

    NoteService turns CacheError into a miss on reads and propagates it from
    invalidation, so a worker that cannot reach Redis never reports a
    successful invalidation.
"""

import logging
from typing import Any, Dict, Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from notes_api.config import settings
from notes_api.exceptions import CacheError
from notes_api.services.cache_base import CacheBackend

logger = logging.getLogger(__name__)


class RedisCacheService(CacheBackend):
    """Async Redis cache for serialized notes."""

    def __init__(self, redis_url: str, key_prefix: str = "") -> None:
        self._redis_url = redis_url
        self._key_prefix = key_prefix
        self._client: Optional[aioredis.Redis] = None
        self._hits = 0
        self._misses = 0

    async def connect(self) -> None:
        """Create the client and probe Redis. Non-fatal if Redis is unavailable."""
        self._client = aioredis.from_url(self._redis_url, decode_responses=True)
        try:
            await self._client.ping()
            logger.info("Redis cache connected: %s", self._redis_url)
        except (RedisError, OSError) as e:
            logger.warning("Redis unreachable at startup, commands will retry: %s", e)

    async def close(self) -> None:
        """Close the Redis connection."""
        if self._client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------
    # Cache operations
    # ------------------------------------------------------------------

    async def get(self, key: str) -> Optional[str]:
        client = self._require_client("get", key=key)
        try:
            value = await client.get(self._make_key(key))
        except (RedisError, OSError) as e:
            raise CacheError(context={"operation": "get", "key": key}) from e

        if value is None:
            self._misses += 1
            logger.debug("CACHE_MISS: %s", key)
            return None
        self._hits += 1
        logger.debug("CACHE_HIT: %s", key)
        return value

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        client = self._require_client("set", key=key)
        try:
            await client.setex(self._make_key(key), ttl_seconds, value)
        except (RedisError, OSError) as e:
            raise CacheError(context={"operation": "set", "key": key}) from e

    async def delete(self, *keys: str) -> None:
        """Remove keys with a single DEL so an invalidation is all-or-nothing."""
        if not keys:
            return

        client = self._require_client("delete", keys=list(keys))
        try:
            await client.delete(*(self._make_key(k) for k in keys))
        except (RedisError, OSError) as e:
            raise CacheError(context={"operation": "delete", "keys": list(keys)}) from e
        logger.debug("CACHE_INVALIDATE: %s", ", ".join(keys))

    async def health_check(self) -> bool:
        if not self._client:
            return False
        try:
            return bool(await self._client.ping())
        except (RedisError, OSError) as e:
            logger.warning("Redis ping failed: %s", e)
            return False

    def stats(self) -> Dict[str, Any]:
        """Hit/miss counters since process start."""
        total = self._hits + self._misses
        hit_rate = self._hits / total if total > 0 else 0.0
        return {
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(hit_rate, 4),
        }

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _make_key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"

    def _require_client(self, operation: str, **context: Any) -> aioredis.Redis:
        if self._client is None:
            raise CacheError(
                message="The cache client is not connected.",
                context={"operation": operation, **context},
            )
        return self._client


# ── Singleton Instance ────────────────────────────────────────────────────
# Connected in the app lifespan; injected into NoteService per request
redis_cache = RedisCacheService(settings.redis_url, key_prefix=settings.cache_key_prefix)


async def get_cache() -> CacheBackend:
    """FastAPI dependency returning the process-wide cache backend."""
    return redis_cache
