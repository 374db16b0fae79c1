"""Domain layer: entities and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import ProductEntity
from app.domain.exceptions import (
    CacheException,
    ProductServiceException,
    ResourceNotFoundException,
    StoreException,
    ValidationException,
)

__all__ = [
    # Entities
    "ProductEntity",
    # Exceptions
    "CacheException",
    "ProductServiceException",
    "ResourceNotFoundException",
    "StoreException",
    "ValidationException",
]
