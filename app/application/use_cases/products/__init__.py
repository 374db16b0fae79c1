"""Product use cases (cache-aside CRUD)."""

from app.application.use_cases.products.product_operations import ProductService

__all__ = ["ProductService"]
