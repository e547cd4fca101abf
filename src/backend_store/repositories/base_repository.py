"""
Base repository class providing common database operations.

Model-specific repositories inherit from `BaseRepository` and only declare
their model; anything that is not plain CRUD (client filters, status toggles)
lives in the subclass.

Repositories never commit. They flush so generated ids and server defaults are
available, and leave the commit/rollback decision to the request session or to
the explicit `Transaction` of the aggregate services.
"""
import time
import logging
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import select, update, delete, func, inspect
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.base import Base
from ..exceptions.base import (
    CreateError,
    DeleteError,
    GetError,
    NilModelError,
    NotFoundError,
    UpdateError,
    VersionConflictError,
)
from ..exceptions.mapper import db_error_handler

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)

# Columns the repository owns; callers never write them directly.
_MANAGED_COLUMNS = {"id", "created_at", "updated_at", "version"}


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing CRUD for one model.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.
    """

    model: ClassVar[type]

    def __init__(self, db: AsyncSession):
        self.db = db

    @property
    def model_name(self) -> str:
        return self.model.__name__

    @property
    def versioned(self) -> bool:
        return hasattr(self.model, "version")

    def _writable_values(self, entity: ModelType) -> dict[str, Any]:
        # A NOT NULL column left unset keeps its stored value.
        columns = inspect(self.model).columns
        values = {}
        for column in columns:
            if column.key in _MANAGED_COLUMNS:
                continue
            value = getattr(entity, column.key)
            if value is None and not column.nullable:
                continue
            values[column.key] = value
        return values

    # =================================================================================================================
    # Create
    # =================================================================================================================

    async def create(self, entity: ModelType) -> ModelType:
        """
        Insert `entity` and return it with its generated id and timestamps.

        Raises:
            DuplicateError: a unique constraint was violated.
            InvalidForeignKeyError: a referenced row does not exist.
            InvalidDataError: a NOT NULL / CHECK constraint was violated.
            CreateError: any other failure.
        """
        if entity is None:
            raise NilModelError(f"{self.model_name} must not be empty")

        logger.debug("repo.create.start", extra={"model": self.model_name, "operation": "create"})
        start = time.perf_counter()

        async with db_error_handler(self.db, self.model_name, fallback=CreateError):
            self.db.add(entity)
            await self.db.flush()
            await self.db.refresh(entity)

        logger.info(
            "repo.create.success",
            extra={
                "model": self.model_name,
                "operation": "create",
                "id": getattr(entity, "id", None),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entity

    # =================================================================================================================
    # Read
    # =================================================================================================================

    async def get_by_id(self, entity_id: int) -> ModelType | None:
        """
        Get an entity by its ID, or None when it does not exist.

        Raises:
            GetError: If the query fails.
        """
        try:
            result = await self.db.execute(
                select(self.model)
                .where(self.model.id == entity_id)
                .execution_options(populate_existing=True)
            )
            entity = result.scalar_one_or_none()
        except Exception as e:
            logger.error("repo.get_by_id.failed", extra={"model": self.model_name, "id": entity_id})
            raise GetError.wrap(e) from e

        logger.debug("repo.get_by_id", extra={"model": self.model_name, "id": entity_id, "found": entity is not None})
        return entity

    async def get_by_id_or_raise(self, entity_id: int) -> ModelType:
        entity = await self.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(f"{self.model_name} with ID {entity_id} not found")
        return entity

    async def get_all(self, limit: int = 100, offset: int = 0) -> list[ModelType]:
        """
        Get a page of entities ordered by id. Always returns a list (possibly empty).
        """
        try:
            query = select(self.model).order_by(self.model.id).offset(offset).limit(limit)
            result = await self.db.execute(query)
            entities = list(result.scalars().all())
        except Exception as e:
            logger.error("repo.get_all.failed", extra={"model": self.model_name})
            raise GetError.wrap(e) from e

        logger.debug("repo.get_all", extra={"model": self.model_name, "count": len(entities)})
        return entities

    async def exists(self, entity_id: int) -> bool:
        try:
            result = await self.db.execute(select(self.model.id).where(self.model.id == entity_id))
            return result.scalar() is not None
        except Exception as e:
            logger.error("repo.exists.failed", extra={"model": self.model_name, "id": entity_id})
            raise GetError.wrap(e) from e

    # =================================================================================================================
    # Update
    # =================================================================================================================

    async def update(self, entity: ModelType) -> ModelType:
        """
        Replace the writable columns of the row identified by `entity.id`.

        For versioned models the write only applies when `entity.version` matches
        the stored version; the stored version is then incremented.

        Raises:
            NotFoundError: no row with that id.
            VersionConflictError: the row exists but its version moved on.
            DuplicateError / InvalidForeignKeyError / InvalidDataError: constraint violations.
            UpdateError: any other failure.
        """
        if entity is None:
            raise NilModelError(f"{self.model_name} must not be empty")

        values = self._writable_values(entity)
        values["updated_at"] = func.now()

        stmt = update(self.model).where(self.model.id == entity.id)
        if self.versioned:
            stmt = stmt.where(self.model.version == entity.version)
            values["version"] = self.model.version + 1
        stmt = stmt.values(**values).execution_options(synchronize_session=False)

        async with db_error_handler(self.db, self.model_name, fallback=UpdateError):
            result = await self.db.execute(stmt)

            if result.rowcount == 0:
                if self.versioned and await self.exists(entity.id):
                    logger.info(
                        "repo.update.version_conflict",
                        extra={"model": self.model_name, "id": entity.id, "version": entity.version},
                    )
                    raise VersionConflictError(
                        f"{self.model_name} with ID {entity.id} was modified by someone else"
                    )
                logger.info("repo.update.not_found", extra={"model": self.model_name, "id": entity.id})
                raise NotFoundError(f"{self.model_name} with ID {entity.id} not found")

        updated = await self.get_by_id_or_raise(entity.id)
        logger.info("repo.update.success", extra={"model": self.model_name, "id": entity.id})
        return updated

    # =================================================================================================================
    # Delete
    # =================================================================================================================

    async def delete(self, entity_id: int) -> None:
        """
        Raises:
            NotFoundError: no row with that id.
            InvalidForeignKeyError: other rows still reference this one.
            DeleteError: any other failure.
        """
        async with db_error_handler(self.db, self.model_name, fallback=DeleteError):
            result = await self.db.execute(delete(self.model).where(self.model.id == entity_id))
            if result.rowcount == 0:
                raise NotFoundError(f"{self.model_name} with ID {entity_id} not found")

        logger.info("repo.delete.success", extra={"model": self.model_name, "id": entity_id})
