"""Product operations: cache-aside CRUD over the product store.

ProductService is the only component that touches both the cache and the
store. Ordering and key rules:

- create: store first, then cache put keyed by the store-assigned id.
- get: cache first; on miss read the store and populate the cache.
- update: store save, then cache put (overwrite) keyed by the product id.
- delete: store delete, then cache evict keyed by the parameter id.

Cache failures never fail create, get or update: the store already decided
the result. A failed put on update falls back to eviction, and a failed
fallback is logged at ERROR. Only delete raises CacheException when the
eviction fails; inside a transactional request that rolls the store delete
back, so store and cache stay in agreement.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from app.application.interfaces.repositories import IProductRepository
from app.core.constants import DEFAULT_PAGE_LIMIT, DEFAULT_PRODUCT_CACHE_TTL
from app.domain.entities.product import ProductEntity
from app.domain.exceptions import (
    CacheException,
    ResourceNotFoundException,
    ValidationException,
)
from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.infrastructure.cache.keys import product_key

logger = logging.getLogger(__name__)

PRODUCT_RESOURCE = "product"


class ProductService:
    """Create, read, update and delete products, keeping the cache consistent with the store."""

    def __init__(
        self,
        product_repo: IProductRepository,
        cache: CacheProtocol | None = None,
        *,
        cache_ttl: int = DEFAULT_PRODUCT_CACHE_TTL,
    ) -> None:
        self.product_repo = product_repo
        self.cache = cache
        self.cache_ttl = cache_ttl

    async def _cache_read(self, product_id: int) -> ProductEntity | None:
        """Return the cached product or None on miss (or undecodable entry)."""
        if self.cache is None:
            return None
        key = product_key(product_id)
        cached = await self.cache.get(key)
        if cached is None:
            return None
        try:
            product = ProductEntity.from_cache_dict(cached)
        except ValidationException as e:
            logger.warning("Ignoring malformed cache entry %s: %s", key, e.message)
            return None
        if product.id != product_id:
            logger.warning("Ignoring cache entry %s holding product id %s", key, product.id)
            return None
        return product

    async def _cache_write(self, product: ProductEntity) -> bool:
        """Put product under its own id. Returns False if the put did not happen."""
        if self.cache is None:
            return False
        key = product_key(product.id)
        stored = await self.cache.set(key, product.to_cache_dict(), ttl=self.cache_ttl)
        if not stored:
            logger.warning("Cache put failed for %s; continuing without cache", key)
        return stored

    async def _cache_evict(self, product_id: int) -> None:
        """Evict product_id; raise CacheException if a configured cache could not evict."""
        if self.cache is None:
            return
        key = product_key(product_id)
        if not await self.cache.delete(key):
            logger.error("Cache evict failed for %s; entry may be stale until TTL expiry", key)
            raise CacheException("evict", key)

    async def create_product(self, name: str, price: Decimal | int | float | str) -> ProductEntity:
        """Validate and persist a new product, then cache it under the store-assigned id.

        Raises:
            ValidationException: If name is blank or price is not > 0.
            StoreException: If persistence fails (no cache interaction).
        """
        candidate = ProductEntity(name=name, price=price)
        created = await self.product_repo.create(candidate)
        await self._cache_write(created)
        logger.info("Created product %s", created.id)
        return created

    async def get_product(self, product_id: int) -> ProductEntity:
        """Return product from cache, or from the store (then cached) on a miss.

        Raises:
            ResourceNotFoundException: If the store has no product with this id.
        """
        cached = await self._cache_read(product_id)
        if cached is not None:
            return cached
        product = await self.product_repo.get_by_id(product_id)
        if product is None:
            raise ResourceNotFoundException(PRODUCT_RESOURCE, product_id)
        await self._cache_write(product)
        return product

    async def update_product(
        self,
        product_id: int | None,
        name: str,
        price: Decimal | int | float | str,
    ) -> ProductEntity:
        """Apply name/price to an existing product, save it and overwrite its cache entry.

        Cache failures are logged, never raised.

        Raises:
            ValidationException: If product_id is missing or name/price are invalid.
            ResourceNotFoundException: If no product has product_id (update never creates).
        """
        if product_id is None:
            raise ValidationException("id required for update", field="id")
        candidate = ProductEntity(id=product_id, name=name, price=price)
        current = await self.product_repo.get_by_id(product_id)
        if current is None:
            raise ResourceNotFoundException(PRODUCT_RESOURCE, product_id)
        updated = await self.product_repo.save(
            current.with_changes(name=candidate.name, price=candidate.price)
        )
        # Runs before the request transaction commits; a failed commit leaves
        # this entry ahead of the store until the TTL expires.
        if self.cache is not None and not await self._cache_write(updated):
            key = product_key(product_id)
            if not await self.cache.delete(key):
                logger.error(
                    "Cache put and evict failed for %s; entry may be stale until TTL expiry",
                    key,
                )
        logger.info("Updated product %s", product_id)
        return updated

    async def delete_product(self, product_id: int) -> None:
        """Delete product from the store, then evict it from the cache.

        Raises:
            ResourceNotFoundException: If no product has product_id.
            StoreException: If the store delete fails (cache left untouched).
            CacheException: If the eviction failed after the store delete. The
                transactional request session then rolls the delete back.
        """
        if not await self.product_repo.exists_by_id(product_id):
            raise ResourceNotFoundException(PRODUCT_RESOURCE, product_id)
        await self.product_repo.delete_by_id(product_id)
        await self._cache_evict(product_id)
        logger.info("Deleted product %s", product_id)

    async def list_products(
        self, skip: int = 0, limit: int = DEFAULT_PAGE_LIMIT
    ) -> list[ProductEntity]:
        """Return a page of products straight from the store (listings are not cached)."""
        if skip < 0:
            raise ValidationException("skip must be >= 0", field="skip")
        if limit < 1:
            raise ValidationException("limit must be >= 1", field="limit")
        return await self.product_repo.list_products(skip=skip, limit=limit)
