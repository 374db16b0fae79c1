"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference domain entities only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.entities.product import ProductEntity


class IProductRepository(Protocol):
    """Protocol for the product store (DIP). Atomic per id; the source of truth."""

    async def create(self, entity: ProductEntity) -> ProductEntity:
        """Persist a product without id; return it with the store-assigned id."""

    async def get_by_id(self, product_id: int) -> ProductEntity | None:
        """Return product by id, or None."""

    async def exists_by_id(self, product_id: int) -> bool:
        """Return True if a product with this id exists."""

    async def save(self, entity: ProductEntity) -> ProductEntity:
        """Replace an existing product (same id); return the stored value."""

    async def delete_by_id(self, product_id: int) -> None:
        """Delete product by id."""

    async def list_products(self, skip: int = 0, limit: int = 100) -> list[ProductEntity]:
        """Return products ordered by id with pagination."""
