"""
Relation DTOs.

Relations travel inside an envelope so the body of a create request reads

    {"relation": {"product_id": 1, "category_id": 2}}
"""
from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel

from ....models import (
    ProductCategoryRelation,
    SupplierCategoryRelation,
    SupplierContactRelation,
    UserCategoryRelation,
)
from .base import ModelDTO


class RelationDTO(ModelDTO):
    """Base for `(parent, child)` pairs. `parent_key`/`child_key` name the id fields."""

    parent_key: ClassVar[str] = ""
    child_key: ClassVar[str] = ""

    created_at: datetime | None = None

    @property
    def parent_id(self) -> int | None:
        return getattr(self, self.parent_key)

    @property
    def child_id(self) -> int | None:
        return getattr(self, self.child_key)


class ProductCategoryRelationDTO(RelationDTO):
    orm_model = ProductCategoryRelation
    parent_key = "product_id"
    child_key = "category_id"

    product_id: int | None = None
    category_id: int | None = None


class SupplierCategoryRelationDTO(RelationDTO):
    orm_model = SupplierCategoryRelation
    parent_key = "supplier_id"
    child_key = "category_id"

    supplier_id: int | None = None
    category_id: int | None = None
    version: int | None = None
    updated_at: datetime | None = None


class UserCategoryRelationDTO(RelationDTO):
    orm_model = UserCategoryRelation
    parent_key = "user_id"
    child_key = "category_id"

    user_id: int | None = None
    category_id: int | None = None


class SupplierContactRelationDTO(RelationDTO):
    orm_model = SupplierContactRelation
    parent_key = "supplier_id"
    child_key = "contact_id"

    supplier_id: int | None = None
    contact_id: int | None = None


class ProductCategoryRelationEnvelope(BaseModel):
    relation: ProductCategoryRelationDTO | None = None


class SupplierCategoryRelationEnvelope(BaseModel):
    relation: SupplierCategoryRelationDTO | None = None


class UserCategoryRelationEnvelope(BaseModel):
    relation: UserCategoryRelationDTO | None = None


class SupplierContactRelationEnvelope(BaseModel):
    relation: SupplierContactRelationDTO | None = None
