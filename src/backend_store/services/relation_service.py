"""
Relation services: id validation, idempotent creation and error translation
on top of a `RelationRepository`.

Per (parent, child) pair the lifecycle is:

    absent  --create-->  present
    present --create-->  present   (no-op, reported as was_created=False)
    present --delete / delete_all-->  absent
"""
import logging
from typing import Generic, TypeVar

from ..exceptions.base import (
    CreateError,
    DeleteError,
    GetError,
    InvalidForeignKeyError,
    NotFoundError,
    RelationCheckError,
    RelationExistsError,
)
from ..repositories.relation_repository import RelationRepository
from .base import require_positive_id, translate_errors

RelationType = TypeVar("RelationType")

logger = logging.getLogger(__name__)

# Errors callers must be able to tell apart; everything else is wrapped.
_PASSTHROUGH = (InvalidForeignKeyError, NotFoundError)


class RelationService(Generic[RelationType]):
    def __init__(self, repository: RelationRepository[RelationType], parent_name: str, child_name: str):
        self.repository = repository
        self.parent_name = parent_name
        self.child_name = child_name

    def _check_pair(self, parent_id: int, child_id: int) -> None:
        require_positive_id(parent_id, self.parent_name)
        require_positive_id(child_id, self.child_name)

    def _extra(self, parent_id: int | None = None, child_id: int | None = None) -> dict:
        return {"parent": self.parent_name, "child": self.child_name, "parent_id": parent_id, "child_id": child_id}

    async def create(self, parent_id: int, child_id: int) -> tuple[RelationType, bool]:
        """
        Create the pair if absent.

        Returns:
            (relation, was_created). A pair that already exists is fetched and
            returned with was_created=False instead of raising.
        """
        self._check_pair(parent_id, child_id)

        try:
            with translate_errors(CreateError, passthrough=_PASSTHROUGH + (RelationExistsError,)):
                relation = await self.repository.create(parent_id, child_id)
        except RelationExistsError:
            with translate_errors(GetError, passthrough=_PASSTHROUGH):
                existing = await self.repository.get_by_pair(parent_id, child_id)
            if existing is None:
                # Deleted between the failed insert and the lookup.
                raise
            logger.info("service.relation.create.exists", extra=self._extra(parent_id, child_id))
            return existing, False

        logger.info("service.relation.create.success", extra=self._extra(parent_id, child_id))
        return relation, True

    async def get_all_by_parent_id(self, parent_id: int) -> list[RelationType]:
        require_positive_id(parent_id, self.parent_name)
        with translate_errors(GetError, passthrough=_PASSTHROUGH):
            return list(await self.repository.get_all_by_parent_id(parent_id) or [])

    async def get_all_by_child_id(self, child_id: int) -> list[RelationType]:
        require_positive_id(child_id, self.child_name)
        with translate_errors(GetError, passthrough=_PASSTHROUGH):
            return list(await self.repository.get_all_by_child_id(child_id) or [])

    async def has_relation(self, parent_id: int, child_id: int) -> bool:
        self._check_pair(parent_id, child_id)
        with translate_errors(RelationCheckError, passthrough=_PASSTHROUGH):
            return await self.repository.has_relation(parent_id, child_id)

    async def delete(self, parent_id: int, child_id: int) -> None:
        self._check_pair(parent_id, child_id)
        with translate_errors(DeleteError, passthrough=_PASSTHROUGH):
            await self.repository.delete(parent_id, child_id)
        logger.info("service.relation.delete.success", extra=self._extra(parent_id, child_id))

    async def delete_all(self, parent_id: int) -> None:
        require_positive_id(parent_id, self.parent_name)
        with translate_errors(DeleteError, passthrough=_PASSTHROUGH):
            await self.repository.delete_all(parent_id)
        logger.info("service.relation.delete_all.success", extra=self._extra(parent_id))
