"""Cache protocol for the service layer (DIP). Real implementation in redis_cache.py."""

from typing import Any, Protocol


class CacheProtocol(Protocol):
    """Protocol for cache backends (e.g. Redis). Used by ProductService."""

    def is_available(self) -> bool:
        """Return True if cache is connected and usable."""
        ...

    async def get(self, key: str) -> Any:
        """Return cached value or None on miss."""
        ...

    async def set(self, key: str, value: Any, ttl: int) -> bool:
        """Store value with TTL in seconds. Return True if stored."""
        ...

    async def delete(self, key: str) -> bool:
        """Remove key from cache. Return True if the delete ran (missing key included)."""
        ...
