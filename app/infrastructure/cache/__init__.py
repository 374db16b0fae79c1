"""Cache: Redis service and cache key utilities.

Used by ProductService for cache-aside reads and writes.
CacheService uses app.core.config; key format is in keys.py (DRY).
"""

from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.infrastructure.cache.keys import product_key, product_pattern
from app.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheProtocol",
    "CacheService",
    "product_key",
    "product_pattern",
]
