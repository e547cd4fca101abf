from sqlalchemy import String, Boolean, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from ..database.base import Base, BigIntPK
from ..validators.field_validators import is_blank, is_positive_id, is_valid_postal_code
from .mixins import TimestampMixin, ensure


class Address(TimestampMixin, Base):
    """
    A postal address owned by a user, a client or a supplier.
    At least one owner reference must be set.
    """
    __tablename__ = "addresses"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)

    user_id: Mapped[int | None] = mapped_column(
        BigIntPK, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True
    )
    client_id: Mapped[int | None] = mapped_column(
        BigIntPK, ForeignKey("clients.id", ondelete="CASCADE"), nullable=True, index=True
    )
    supplier_id: Mapped[int | None] = mapped_column(
        BigIntPK, ForeignKey("suppliers.id", ondelete="CASCADE"), nullable=True, index=True
    )

    street: Mapped[str] = mapped_column(String(255), nullable=False)
    street_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    complement: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str] = mapped_column(String(2), nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    postal_code: Mapped[str] = mapped_column(String(10), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def validate(self) -> None:
        owners = [self.user_id, self.client_id, self.supplier_id]
        ensure(any(o is not None for o in owners), "owner",
               "at least one of user_id, client_id or supplier_id is required")
        for field, value in (("user_id", self.user_id), ("client_id", self.client_id),
                             ("supplier_id", self.supplier_id)):
            if value is not None:
                ensure(is_positive_id(value), field, "must be greater than zero")
        ensure(not is_blank(self.street), "street", "is required")
        ensure(len(self.street) <= 255, "street", "must have at most 255 characters")
        ensure(not is_blank(self.city), "city", "is required")
        ensure(not is_blank(self.state) and len(self.state.strip()) == 2, "state", "must have 2 letters")
        ensure(not is_blank(self.country), "country", "is required")
        ensure(is_valid_postal_code(self.postal_code), "postal_code", "invalid format")

    def __repr__(self) -> str:
        return f"<Address(id={self.id!r}, city={self.city!r})>"
