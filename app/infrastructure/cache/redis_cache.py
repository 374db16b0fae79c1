"""Redis-based cache service for product lookups.

Provides async Redis caching with TTL support. Values are JSON-encoded;
None is never cached (a miss is a miss, not a cached null). Integrates
with app.infrastructure.cache.keys for key format (DRY).
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import redis.asyncio as redis

from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

_DELETE_PATTERN_CHUNK_SIZE = 500
_RECONNECT_INTERVAL_SECONDS = 5.0


class CacheService:
    """Async Redis cache service with TTL support.

    Uses app.core.config for connection settings. Call connect() at
    startup and disconnect() at shutdown. Operations never raise: get
    returns None and set/delete return False when Redis is unavailable or
    errors, so callers decide which failures matter.

    Once connected, a lost connection is re-established lazily: the next
    operation after reconnect_interval seconds calls connect() again.
    disconnect() stops this.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI. When given,
                the service is considered connected.
            settings: Optional settings; defaults to get_settings().
        """
        self.redis = redis_client
        self.settings = settings or get_settings()
        self._connected = redis_client is not None
        self._recoverable = redis_client is not None
        self._next_connect_at = 0.0
        self.reconnect_interval = _RECONNECT_INTERVAL_SECONDS

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup."""
        if self.redis is None:
            try:
                self.redis = redis.Redis(
                    host=self.settings.redis_host,
                    port=self.settings.redis_port,
                    db=self.settings.redis_db,
                    password=self.settings.redis_password.get_secret_value() if self.settings.redis_password else None,
                    decode_responses=True,
                    socket_connect_timeout=5,
                    socket_timeout=self.settings.redis_socket_timeout,
                    socket_keepalive=True,
                )
                await self.redis.ping()
                self._connected = True
                self._recoverable = True
                logger.info(
                    "Redis cache connected: %s:%s",
                    self.settings.redis_host,
                    self.settings.redis_port,
                )
            except (redis.ConnectionError, redis.TimeoutError) as e:
                logger.warning(
                    "Redis connection failed: %s. Cache disabled.",
                    e,
                )
                self._connected = False
                self.redis = None
                self._next_connect_at = time.monotonic() + self.reconnect_interval

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        self._recoverable = False
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    async def _reconnect(self) -> bool:
        """Drop the current client and connect again. Returns True if reconnected."""
        if self.redis is None:
            return False
        try:
            await self.redis.aclose()
        except redis.RedisError:
            pass
        self.redis = None
        self._connected = False
        await self.connect()
        return self._connected

    async def _ensure_connected(self) -> bool:
        """Return True if usable, calling connect() again once the backoff has passed."""
        if self.is_available():
            return True
        if not self._recoverable or time.monotonic() < self._next_connect_at:
            return False
        await self.connect()
        return self.is_available()

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    def _decode(self, key: str, value: str | None) -> Any | None:
        if value is None:
            logger.debug("Cache MISS: %s", key)
            return None
        try:
            decoded = json.loads(value)
        except ValueError:
            logger.warning("Cache value for key %s is not valid JSON; treating as miss", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return decoded

    async def _execute(
        self,
        operation: str,
        target: str,
        call: Callable[[], Awaitable[T]],
        failed: T,
    ) -> T:
        """Run call() against Redis, retrying once after a reconnect.

        Returns failed when Redis is unavailable or the command errors.
        call() must read self.redis when invoked (the client is replaced on
        reconnect).
        """
        if not await self._ensure_connected():
            return failed
        try:
            return await call()
        except (redis.ConnectionError, redis.TimeoutError):
            if await self._reconnect():
                try:
                    return await call()
                except redis.RedisError:
                    logger.exception("Cache %s error for %s after reconnect", operation, target)
                    return failed
            logger.warning("Cache %s unavailable for %s (Redis disconnected)", operation, target)
            return failed
        except redis.RedisError:
            logger.exception("Cache %s error for %s", operation, target)
            return failed

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None if missing/unavailable.

        Args:
            key: Cache key (use app.infrastructure.cache.keys builders).

        Returns:
            Cached value or None.
        """

        async def _get() -> Any | None:
            return self._decode(key, await self.redis.get(key))

        return await self._execute("get", key, _get, None)

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store value with TTL. Returns True on success.

        Args:
            key: Cache key.
            value: Value to cache (JSON-serializable). None is never stored.
            ttl: Time-to-live in seconds (default settings.cache_ttl_products).

        Returns:
            True if stored, False otherwise.
        """
        if value is None:
            return False
        ttl = ttl if ttl is not None else self.settings.cache_ttl_products
        try:
            serialized = json.dumps(value)
        except (TypeError, ValueError):
            logger.exception("Cache set error for key %s: value not JSON-serializable", key)
            return False

        async def _set() -> bool:
            await self.redis.setex(key, ttl, serialized)
            logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
            return True

        return await self._execute("set", key, _set, False)

    async def delete(self, key: str) -> bool:
        """Remove key from cache. Returns True once the delete ran.

        Deleting a key that does not exist is a no-op and still returns True,
        so False always means the entry may still be there.
        """

        async def _delete() -> bool:
            await self.redis.delete(key)
            logger.debug("Cache DELETE: %s", key)
            return True

        return await self._execute("delete", key, _delete, False)

    async def delete_pattern(self, pattern: str) -> int:
        """Delete all keys matching pattern with SCAN and batched UNLINK.

        Args:
            pattern: Redis SCAN match pattern (e.g. product:id:*).

        Returns:
            Number of keys deleted.
        """

        async def _scan_and_unlink() -> int:
            deleted = 0
            chunk: list[str] = []
            async for key in self.redis.scan_iter(match=pattern):
                chunk.append(key)
                if len(chunk) >= _DELETE_PATTERN_CHUNK_SIZE:
                    deleted += await self._unlink(chunk)
                    chunk = []
            if chunk:
                deleted += await self._unlink(chunk)
            return deleted

        deleted = await self._execute("delete_pattern", pattern, _scan_and_unlink, 0)
        if deleted:
            logger.info("Cache INVALIDATE: %s (%s keys)", pattern, deleted)
        return deleted

    async def _unlink(self, keys: list[str]) -> int:
        async with self.redis.pipeline(transaction=False) as pipe:
            pipe.unlink(*keys)
            results = await pipe.execute()
        return sum(int(r or 0) for r in results)
