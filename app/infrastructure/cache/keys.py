"""Cache key builders. Single place for key format (DRY).

Key components must not contain CACHE_KEY_SEP to avoid ambiguous or
colliding keys.
"""

from app.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_PRODUCT


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value is empty or contains CACHE_KEY_SEP.
    """
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def product_key(product_id: int) -> str:
    """Cache key for product by ID."""
    value = str(product_id)
    _validate_key_component(value, "product_id")
    return f"{CACHE_PREFIX_PRODUCT}{CACHE_KEY_SEP}id{CACHE_KEY_SEP}{value}"


def product_pattern() -> str:
    """SCAN match pattern covering every product key."""
    return f"{CACHE_PREFIX_PRODUCT}{CACHE_KEY_SEP}id{CACHE_KEY_SEP}*"
