"""Application layer: interfaces and use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (product store, cache).
"""

from app.application.interfaces import IProductRepository
from app.application.use_cases.products import ProductService

__all__ = [
    "IProductRepository",
    "ProductService",
]
