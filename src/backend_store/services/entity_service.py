"""
Entity services: validate, check existence, then delegate to the repository.
"""
import logging
from typing import Generic, TypeVar

from ..exceptions.base import (
    CreateError,
    DeleteError,
    GetError,
    InvalidDataError,
    NilModelError,
    NotFoundError,
    UpdateError,
)
from ..repositories.base_repository import BaseRepository
from .base import require_positive_id, translate_errors

ModelType = TypeVar("ModelType")

logger = logging.getLogger(__name__)


class EntityService(Generic[ModelType]):
    """
    Generic service for a single-table entity.

    - create:  model must be present and valid
    - update:  id > 0, valid model, row must exist; versioned models must carry
               the version they were read with (stale -> VersionConflictError)
    - delete:  id > 0, row must exist
    """

    def __init__(self, repository: BaseRepository[ModelType], entity_name: str, *, versioned: bool = False):
        self.repository = repository
        self.entity_name = entity_name
        self.versioned = versioned

    async def create(self, entity: ModelType | None) -> ModelType:
        if entity is None:
            raise NilModelError(f"{self.entity_name} must not be empty")
        entity.validate()

        with translate_errors(CreateError):
            created = await self.repository.create(entity)

        logger.info("service.create.success", extra={"entity": self.entity_name, "id": created.id})
        return created

    async def get_by_id(self, entity_id: int) -> ModelType:
        require_positive_id(entity_id)
        with translate_errors(GetError):
            entity = await self.repository.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(f"{self.entity_name} with ID {entity_id} not found")
        return entity

    async def get_all(self, limit: int = 100, offset: int = 0) -> list[ModelType]:
        limit = limit if limit > 0 else 100
        offset = max(offset, 0)
        with translate_errors(GetError):
            return list(await self.repository.get_all(limit=limit, offset=offset) or [])

    async def update(self, entity: ModelType | None) -> ModelType:
        if entity is None:
            raise NilModelError(f"{self.entity_name} must not be empty")
        require_positive_id(entity.id)
        if self.versioned and (entity.version is None or entity.version <= 0):
            raise InvalidDataError("version: is required for updates", fields=["version"])
        entity.validate()

        with translate_errors(UpdateError):
            existing = await self.repository.get_by_id(entity.id)
            if existing is None:
                raise NotFoundError(f"{self.entity_name} with ID {entity.id} not found")
            updated = await self.repository.update(entity)

        logger.info("service.update.success", extra={"entity": self.entity_name, "id": entity.id})
        return updated

    async def delete(self, entity_id: int) -> None:
        require_positive_id(entity_id)
        with translate_errors(DeleteError):
            existing = await self.repository.get_by_id(entity_id)
            if existing is None:
                raise NotFoundError(f"{self.entity_name} with ID {entity_id} not found")
            await self.repository.delete(entity_id)

        logger.info("service.delete.success", extra={"entity": self.entity_name, "id": entity_id})
