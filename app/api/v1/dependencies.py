"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, the shared cache and the
product service. Routes depend only on these dependencies, not on infra
directly. The cache is created once in the lifespan (app.state.cache);
the service and repository are built per request.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.use_cases.products import ProductService
from app.core.config import get_settings
from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.infrastructure.persistence.database import get_db, get_db_transactional
from app.infrastructure.persistence.repositories import ProductRepository


def get_cache(request: Request) -> CacheProtocol | None:
    """Shared cache from app.state, or None when caching is disabled."""
    return getattr(request.app.state, "cache", None)


async def get_product_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ProductRepository:
    """Product repository for read operations."""
    return ProductRepository(db)


async def get_product_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ProductRepository:
    """Product repository for writes (transactional)."""
    return ProductRepository(db)


async def get_product_service(
    product_repo: Annotated[ProductRepository, Depends(get_product_repo)],
    cache: Annotated[CacheProtocol | None, Depends(get_cache)],
) -> ProductService:
    """ProductService over a read session."""
    return ProductService(
        product_repo, cache, cache_ttl=get_settings().cache_ttl_products
    )


async def get_product_service_for_write(
    product_repo: Annotated[ProductRepository, Depends(get_product_repo_for_write)],
    cache: Annotated[CacheProtocol | None, Depends(get_cache)],
) -> ProductService:
    """ProductService over a transactional session (commit on success, rollback on error)."""
    return ProductService(
        product_repo, cache, cache_ttl=get_settings().cache_ttl_products
    )
