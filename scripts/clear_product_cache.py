"""Drop every cached product entry from Redis.

Usage:
    python -m scripts.clear_product_cache
Use after bulk edits made directly in the database (outside the API), which
bypass cache eviction. Readers repopulate the cache from the store on demand.
"""

import asyncio
import sys

from app.core.config import get_settings
from app.infrastructure.cache.keys import product_pattern
from app.infrastructure.cache.redis_cache import CacheService
from app.shared.telemetry.logging import setup_logging


async def clear_product_cache(cache: CacheService) -> int:
    """Delete all product keys. Returns number of keys deleted."""
    return await cache.delete_pattern(product_pattern())


async def main() -> None:
    """Connect to Redis, clear product keys, report the count."""
    setup_logging()
    settings = get_settings()
    if not settings.redis_enabled:
        print("Redis cache is disabled (REDIS_ENABLED=false); nothing to clear", file=sys.stderr)
        sys.exit(1)
    cache = CacheService(settings=settings)
    await cache.connect()
    if not cache.is_available():
        print(
            f"Redis not reachable at {settings.redis_host}:{settings.redis_port}",
            file=sys.stderr,
        )
        sys.exit(1)
    try:
        deleted = await clear_product_cache(cache)
    finally:
        await cache.disconnect()
    print(f"Deleted {deleted} cached product entries")


if __name__ == "__main__":
    asyncio.run(main())
