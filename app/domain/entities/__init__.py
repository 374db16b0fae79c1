"""Domain entities (business objects independent of persistence)."""

from app.domain.entities.product import ProductEntity

__all__ = ["ProductEntity"]
