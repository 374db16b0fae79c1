"""Core constants: cache key prefixes and shared literal values.

Single source of truth for cache key structure (DRY). Used by
infrastructure cache and the product service.
"""

# Cache key prefixes (used with :id:<product_id>)
CACHE_PREFIX_PRODUCT = "product"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Reference deployment TTL for cached products (10 minutes)
DEFAULT_PRODUCT_CACHE_TTL = 600

# Bounds for the product listing endpoint
DEFAULT_PAGE_LIMIT = 100
MAX_PAGE_LIMIT = 500
