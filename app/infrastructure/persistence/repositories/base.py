"""Base repository: generic CRUD over an AsyncSession with store-error wrapping."""

from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

from sqlalchemy import delete, exists, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.exceptions import StoreException
from app.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)
T = TypeVar("T")


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, exists_by_id, get_all, create, update, delete_by_id.

    Every SQLAlchemyError is re-raised as StoreException so callers above
    the persistence layer never see driver exceptions.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def _run(self, operation: str, call: Callable[[], Awaitable[T]]) -> T:
        """Await call(); wrap SQLAlchemyError in StoreException(operation)."""
        try:
            return await call()
        except SQLAlchemyError as e:
            raise StoreException(operation, str(e)) from e

    async def get_by_id(self, entity_id: Any) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model

        async def _get() -> ModelType | None:
            result = await self.db.execute(select(self.model).where(model.id == entity_id))
            return result.scalar_one_or_none()

        return await self._run("get_by_id", _get)

    async def exists_by_id(self, entity_id: Any) -> bool:
        """Return True if a record with this primary key exists."""
        model: Any = self.model

        async def _exists() -> bool:
            result = await self.db.execute(select(exists().where(model.id == entity_id)))
            return bool(result.scalar())

        return await self._run("exists_by_id", _exists)

    async def get_all(self, skip: int = 0, limit: int = 100) -> list[ModelType]:
        """Return records with pagination, ordered by primary key."""
        model: Any = self.model

        async def _all() -> list[ModelType]:
            result = await self.db.execute(
                select(self.model).order_by(model.id).offset(skip).limit(limit)
            )
            return list(result.scalars().all())

        return await self._run("get_all", _all)

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record; the database assigns generated columns."""

        async def _create() -> ModelType:
            self.db.add(obj)
            await self.db.flush()
            await self.db.refresh(obj)
            return obj

        return await self._run("create", _create)

    async def update(self, obj: ModelType) -> ModelType:
        """Flush changes made to an attached record and reload generated columns."""

        async def _update() -> ModelType:
            await self.db.flush()
            await self.db.refresh(obj)
            return obj

        return await self._run("update", _update)

    async def delete_by_id(self, entity_id: Any) -> int:
        """Delete by primary key without loading the row. Returns rows deleted."""
        model: Any = self.model

        async def _delete() -> int:
            result = await self.db.execute(delete(self.model).where(model.id == entity_id))
            return result.rowcount or 0

        return await self._run("delete_by_id", _delete)
