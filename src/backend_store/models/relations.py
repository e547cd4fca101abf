"""
Join tables for the many-to-many relations of the store.

Each row is identified by its `(parent, child)` pair; both sides are foreign
keys with ON DELETE CASCADE, so removing an entity also removes its relations.
"""
from datetime import datetime
from typing import ClassVar

from sqlalchemy import DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from ..database.base import Base, BigIntPK


class RelationMixin:
    # Column names of the pair, used by the generic relation repository.
    parent_key: ClassVar[str] = ""
    child_key: ClassVar[str] = ""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    @property
    def parent_id(self) -> int:
        return getattr(self, self.parent_key)

    @property
    def child_id(self) -> int:
        return getattr(self, self.child_key)

    def __repr__(self) -> str:
        return f"<{type(self).__name__}({self.parent_key}={self.parent_id!r}, {self.child_key}={self.child_id!r})>"


class ProductCategoryRelation(RelationMixin, Base):
    __tablename__ = "product_category_relations"
    parent_key = "product_id"
    child_key = "category_id"

    product_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True
    )
    category_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("product_categories.id", ondelete="CASCADE"), primary_key=True, index=True
    )


class SupplierCategoryRelation(RelationMixin, Base):
    __tablename__ = "supplier_category_relations"
    parent_key = "supplier_id"
    child_key = "category_id"

    supplier_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("suppliers.id", ondelete="CASCADE"), primary_key=True
    )
    category_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("supplier_categories.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1, server_default="1")
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )


class UserCategoryRelation(RelationMixin, Base):
    __tablename__ = "user_category_relations"
    parent_key = "user_id"
    child_key = "category_id"

    user_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    category_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("user_categories.id", ondelete="CASCADE"), primary_key=True, index=True
    )


class SupplierContactRelation(RelationMixin, Base):
    __tablename__ = "supplier_contact_relations"
    parent_key = "supplier_id"
    child_key = "contact_id"

    supplier_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("suppliers.id", ondelete="CASCADE"), primary_key=True
    )
    contact_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("contacts.id", ondelete="CASCADE"), primary_key=True, index=True
    )
