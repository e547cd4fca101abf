from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from ..database.base import Base, BigIntPK
from ..validators.field_validators import is_blank, length_between
from .mixins import TimestampMixin, ensure


class CategoryMixin(TimestampMixin):
    """
    Shared shape of the three category tables (product, supplier, user).

    Names are unique per table, non-blank and 2-255 characters long.
    """

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False
    )

    description: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def validate(self) -> None:
        ensure(not is_blank(self.name), "name", "is required")
        ensure(length_between(self.name, 2, 255), "name", "must have between 2 and 255 characters")
        ensure(self.description is None or len(self.description) <= 255,
               "description", "must have at most 255 characters")

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id!r}, name={self.name!r})>"


class ProductCategory(CategoryMixin, Base):
    __tablename__ = "product_categories"


class SupplierCategory(CategoryMixin, Base):
    __tablename__ = "supplier_categories"


class UserCategory(CategoryMixin, Base):
    __tablename__ = "user_categories"
