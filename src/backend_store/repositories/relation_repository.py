"""
Generic repository for the many-to-many join tables.

All relation tables share one shape (a `(parent, child)` primary key plus
timestamps), so a single implementation parameterised by the model serves
product-category, supplier-category, user-category and supplier-contact.

Error policy:
    create        duplicate pair -> RelationExistsError, missing parent/child -> InvalidForeignKeyError,
                  anything else -> CreateError
    has_relation  no row -> False; failure -> RelationCheckError
    get_all_*     always a list; query -> GetError, row -> ScanError, cursor -> IterateError
    delete        no row -> NotFoundError; FK -> InvalidForeignKeyError; else DeleteError
    delete_all    zero rows is success
"""
import logging
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions.base import (
    CreateError,
    DeleteError,
    GetError,
    IterateError,
    NotFoundError,
    RelationCheckError,
    RelationExistsError,
    ScanError,
)
from ..exceptions.mapper import db_error_handler
from ..models import (
    ProductCategoryRelation,
    SupplierCategoryRelation,
    UserCategoryRelation,
    SupplierContactRelation,
)

RelationType = TypeVar("RelationType")

logger = logging.getLogger(__name__)


class RelationRepository(Generic[RelationType]):
    model: ClassVar[type]

    def __init__(self, db: AsyncSession):
        self.db = db

    @property
    def model_name(self) -> str:
        return self.model.__name__

    @property
    def parent_column(self):
        return getattr(self.model, self.model.parent_key)

    @property
    def child_column(self):
        return getattr(self.model, self.model.child_key)

    def _pair_clause(self, parent_id: int, child_id: int):
        return (self.parent_column == parent_id) & (self.child_column == child_id)

    def _log_extra(self, parent_id: int | None = None, child_id: int | None = None) -> dict[str, Any]:
        return {"model": self.model_name, "parent_id": parent_id, "child_id": child_id}

    # -----------------------------------------------------------------------------------------------------------------
    # Writes
    # -----------------------------------------------------------------------------------------------------------------

    async def create(self, parent_id: int, child_id: int) -> RelationType:
        relation = self.model(**{self.model.parent_key: parent_id, self.model.child_key: child_id})

        async with db_error_handler(
            self.db, self.model_name, on_duplicate=RelationExistsError, fallback=CreateError
        ):
            self.db.add(relation)
            await self.db.flush()
            await self.db.refresh(relation)

        logger.info("repo.relation.create.success", extra=self._log_extra(parent_id, child_id))
        return relation

    async def delete(self, parent_id: int, child_id: int) -> None:
        stmt = delete(self.model).where(self._pair_clause(parent_id, child_id))

        async with db_error_handler(self.db, self.model_name, fallback=DeleteError):
            result = await self.db.execute(stmt)
            if result.rowcount == 0:
                logger.info("repo.relation.delete.not_found", extra=self._log_extra(parent_id, child_id))
                raise NotFoundError(f"{self.model_name} ({parent_id}, {child_id}) not found")

        logger.info("repo.relation.delete.success", extra=self._log_extra(parent_id, child_id))

    async def delete_all(self, parent_id: int) -> int:
        """Remove every relation of `parent_id`; returns the number of rows removed (possibly 0)."""
        stmt = delete(self.model).where(self.parent_column == parent_id)

        async with db_error_handler(self.db, self.model_name, fallback=DeleteError):
            result = await self.db.execute(stmt)

        removed = result.rowcount or 0
        logger.info("repo.relation.delete_all.success", extra={**self._log_extra(parent_id), "removed": removed})
        return removed

    # -----------------------------------------------------------------------------------------------------------------
    # Reads
    # -----------------------------------------------------------------------------------------------------------------

    async def has_relation(self, parent_id: int, child_id: int) -> bool:
        try:
            result = await self.db.execute(
                select(self.parent_column).where(self._pair_clause(parent_id, child_id))
            )
            return result.first() is not None
        except Exception as e:
            logger.error("repo.relation.check.failed", extra=self._log_extra(parent_id, child_id))
            raise RelationCheckError.wrap(e) from e

    async def get_by_pair(self, parent_id: int, child_id: int) -> RelationType | None:
        try:
            result = await self.db.execute(
                select(self.model)
                .where(self._pair_clause(parent_id, child_id))
                .execution_options(populate_existing=True)
            )
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error("repo.relation.get_by_pair.failed", extra=self._log_extra(parent_id, child_id))
            raise GetError.wrap(e) from e

    async def get_all_by_parent_id(self, parent_id: int) -> list[RelationType]:
        return await self._list_where(self.parent_column == parent_id, self.child_column)

    async def get_all_by_child_id(self, child_id: int) -> list[RelationType]:
        return await self._list_where(self.child_column == child_id, self.parent_column)

    async def _list_where(self, clause, order_column) -> list[RelationType]:
        table = self.model.__table__
        try:
            result = await self.db.execute(select(*table.columns).where(clause).order_by(order_column))
        except Exception as e:
            logger.error("repo.relation.list.failed", extra={"model": self.model_name})
            raise GetError.wrap(e) from e

        relations: list[RelationType] = []
        rows = iter(result.mappings())
        while True:
            try:
                row = next(rows)
            except StopIteration:
                break
            except Exception as e:
                logger.error("repo.relation.list.iterate_failed", extra={"model": self.model_name})
                raise IterateError.wrap(e) from e

            try:
                relations.append(self._scan(row))
            except Exception as e:
                logger.error("repo.relation.list.scan_failed", extra={"model": self.model_name})
                raise ScanError.wrap(e) from e

        return relations

    def _scan(self, row) -> RelationType:
        return self.model(**{column.key: row[column.name] for column in self.model.__table__.columns})


class ProductCategoryRelationRepository(RelationRepository[ProductCategoryRelation]):
    model = ProductCategoryRelation


class SupplierCategoryRelationRepository(RelationRepository[SupplierCategoryRelation]):
    model = SupplierCategoryRelation

    async def get_by_category_id(self, category_id: int) -> list[SupplierCategoryRelation]:
        return await self.get_all_by_child_id(category_id)


class UserCategoryRelationRepository(RelationRepository[UserCategoryRelation]):
    model = UserCategoryRelation


class SupplierContactRelationRepository(RelationRepository[SupplierContactRelation]):
    model = SupplierContactRelation
