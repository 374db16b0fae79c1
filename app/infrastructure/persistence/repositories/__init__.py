"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.product_repo import ProductRepository

__all__ = [
    "BaseRepository",
    "ProductRepository",
]
