"""Pytest configuration and fixtures for the product service.

HTTP tests drive app.main.create_app() through httpx ASGITransport with the
DB session dependencies pointed at an in-memory SQLite database and the
shared cache replaced by InMemoryCache. Service tests use the in-memory
store and cache below, which count calls and can inject failures.
"""

import os

# Must be set before app.core.config is first read.
os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("DB_CREATE_TABLES", "false")

import copy
from collections import Counter
from collections.abc import AsyncIterator
from dataclasses import replace
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.application.use_cases.products import ProductService
from app.core.config import get_settings
from app.domain.entities.product import ProductEntity
from app.domain.exceptions import ResourceNotFoundException, StoreException
from app.infrastructure.persistence import models  # noqa: F401
from app.infrastructure.persistence.database import (
    Base,
    get_db,
    get_db_transactional,
)
from app.main import create_app


class InMemoryProductRepository:
    """Dict-backed store with sequential ids, per-operation call counts and failure injection."""

    def __init__(self) -> None:
        self.rows: dict[int, ProductEntity] = {}
        self.next_id = 1
        self.calls: Counter[str] = Counter()
        self.fail_on: set[str] = set()

    def _record(self, operation: str) -> None:
        self.calls[operation] += 1
        if operation in self.fail_on:
            raise StoreException(operation, "injected failure")

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())

    async def create(self, entity: ProductEntity) -> ProductEntity:
        self._record("create")
        stored = replace(entity, id=self.next_id)
        self.rows[stored.id] = stored
        self.next_id += 1
        return stored

    async def get_by_id(self, product_id: int) -> ProductEntity | None:
        self._record("get_by_id")
        return self.rows.get(product_id)

    async def exists_by_id(self, product_id: int) -> bool:
        self._record("exists_by_id")
        return product_id in self.rows

    async def save(self, entity: ProductEntity) -> ProductEntity:
        self._record("save")
        if entity.id not in self.rows:
            raise ResourceNotFoundException("product", entity.id)
        self.rows[entity.id] = entity
        return entity

    async def delete_by_id(self, product_id: int) -> None:
        self._record("delete_by_id")
        self.rows.pop(product_id, None)

    async def list_products(self, skip: int = 0, limit: int = 100) -> list[ProductEntity]:
        self._record("list_products")
        ordered = [self.rows[k] for k in sorted(self.rows)]
        return ordered[skip : skip + limit]


class InMemoryCache:
    """Cache with TTL on a manual clock (advance()) and switchable failures."""

    def __init__(self) -> None:
        self.entries: dict[str, tuple[Any, float]] = {}
        self.now = 0.0
        self.available = True
        self.fail_set = False
        self.fail_delete = False
        self.calls: Counter[str] = Counter()

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def is_available(self) -> bool:
        return self.available

    def peek(self, key: str) -> Any | None:
        """Value under key if present and unexpired, without counting a call."""
        entry = self.entries.get(key)
        if entry is None or self.now >= entry[1]:
            return None
        return entry[0]

    async def get(self, key: str) -> Any | None:
        self.calls["get"] += 1
        if not self.available:
            return None
        value = self.peek(key)
        if value is None:
            self.entries.pop(key, None)
            return None
        return copy.deepcopy(value)

    async def set(self, key: str, value: Any, ttl: int) -> bool:
        self.calls["set"] += 1
        if value is None or self.fail_set or not self.available:
            return False
        self.entries[key] = (copy.deepcopy(value), self.now + ttl)
        return True

    async def delete(self, key: str) -> bool:
        self.calls["delete"] += 1
        if self.fail_delete or not self.available:
            return False
        self.entries.pop(key, None)
        return True


@pytest.fixture
def product_repo() -> InMemoryProductRepository:
    return InMemoryProductRepository()


@pytest.fixture
def cache() -> InMemoryCache:
    return InMemoryCache()


@pytest.fixture
def product_service(product_repo, cache) -> ProductService:
    """ProductService over the in-memory store and cache (TTL 600 s)."""
    return ProductService(product_repo, cache, cache_ttl=600)


@pytest.fixture
def uncached_product_service(product_repo) -> ProductService:
    """ProductService with no cache configured."""
    return ProductService(product_repo, None)


@pytest.fixture
async def db_engine() -> AsyncIterator[AsyncEngine]:
    """In-memory SQLite engine with the schema created. One shared connection."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncIterator[AsyncSession]:
    """Session for repository tests. Rolled back after each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def app(session_factory, cache) -> FastAPI:
    """App wired to the in-memory database and InMemoryCache."""
    get_settings.cache_clear()
    application = create_app()
    application.state.cache = cache

    async def _db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    async def _db_transactional() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            async with session.begin():
                yield session

    application.dependency_overrides[get_db] = _db
    application.dependency_overrides[get_db_transactional] = _db_transactional
    return application


@pytest.fixture
async def client(app) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
