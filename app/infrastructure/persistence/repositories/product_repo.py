"""Product repository. Returns domain ProductEntity values, never ORM rows."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.entities.product import ProductEntity
from app.domain.exceptions import ResourceNotFoundException, StoreException
from app.infrastructure.persistence.models.product import Product
from app.infrastructure.persistence.repositories.base import BaseRepository


def _product_to_entity(p: Product) -> ProductEntity:
    """Map ORM Product to domain ProductEntity."""
    return ProductEntity(id=p.id, name=p.name, price=p.price)


class ProductRepository(BaseRepository[Product]):
    """Store for products. No caching here: ProductService owns the cache."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Product)

    async def create(self, entity: ProductEntity) -> ProductEntity:  # type: ignore[override]
        """Insert a product; the database assigns its id."""
        created = await super().create(Product(name=entity.name, price=entity.price))
        return _product_to_entity(created)

    async def get_by_id(self, product_id: int) -> ProductEntity | None:  # type: ignore[override]
        """Return product by id, or None."""
        product = await super().get_by_id(product_id)
        return _product_to_entity(product) if product else None

    async def save(self, entity: ProductEntity) -> ProductEntity:
        """Replace name/price of an existing product.

        Raises:
            ResourceNotFoundException: If no product has entity.id.
        """
        if entity.id is None:
            raise StoreException("save", "product id is required")
        product = await super().get_by_id(entity.id)
        if product is None:
            raise ResourceNotFoundException("product", entity.id)
        product.name = entity.name
        product.price = entity.price
        updated = await self.update(product)
        return _product_to_entity(updated)

    async def delete_by_id(self, product_id: int) -> None:  # type: ignore[override]
        """Delete product by id. Deleting a missing id is a no-op."""
        await super().delete_by_id(product_id)

    async def list_products(self, skip: int = 0, limit: int = 100) -> list[ProductEntity]:
        """Return products ordered by id with pagination."""
        return [_product_to_entity(p) for p in await self.get_all(skip=skip, limit=limit)]
