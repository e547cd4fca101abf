from sqlalchemy import String, Boolean, Integer, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from ..database.base import Base, BigIntPK
from ..validators.field_validators import is_blank, is_positive_id
from .mixins import TimestampMixin, VersionMixin, ensure


class Product(TimestampMixin, VersionMixin, Base):
    """
    A sellable item, optionally linked to the supplier that provides it.
    """
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)

    supplier_id: Mapped[int | None] = mapped_column(
        BigIntPK,
        ForeignKey("suppliers.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    product_name: Mapped[str] = mapped_column(String(255), nullable=False)

    manufacturer: Mapped[str] = mapped_column(String(255), nullable=False)

    description: Mapped[str | None] = mapped_column(String(500), nullable=True)

    cost_price: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)

    sale_price: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)

    stock_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    status: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def validate(self) -> None:
        ensure(not is_blank(self.product_name), "product_name", "is required")
        ensure(len(self.product_name) <= 255, "product_name", "must have at most 255 characters")
        ensure(not is_blank(self.manufacturer), "manufacturer", "is required")
        if self.supplier_id is not None:
            ensure(is_positive_id(self.supplier_id), "supplier_id", "must be greater than zero")
        cost = self.cost_price or 0
        sale = self.sale_price or 0
        ensure(cost >= 0, "cost_price", "must not be negative")
        ensure(sale >= 0, "sale_price", "must not be negative")
        ensure(sale >= cost, "sale_price", "must be greater than or equal to cost_price")
        ensure((self.stock_quantity or 0) >= 0, "stock_quantity", "must not be negative")

    def __repr__(self) -> str:
        return f"<Product(id={self.id!r}, product_name={self.product_name!r})>"
