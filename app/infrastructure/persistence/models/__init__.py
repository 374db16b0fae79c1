"""ORM models. Importing this package registers all tables on Base.metadata."""

from app.infrastructure.persistence.models.product import Product

__all__ = ["Product"]
