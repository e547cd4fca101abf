from sqlalchemy import String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from ..database.base import Base, BigIntPK
from ..validators.field_validators import (
    is_blank,
    length_between,
    is_positive_id,
    is_valid_email,
    is_valid_phone,
    is_valid_cell,
)
from .mixins import TimestampMixin, ensure


class Contact(TimestampMixin, Base):
    __tablename__ = "contacts"

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

    contact_name: Mapped[str] = mapped_column(String(100), nullable=False)
    contact_position: Mapped[str | None] = mapped_column(String(100), nullable=True)
    email: Mapped[str | None] = mapped_column(String(100), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    cell: Mapped[str | None] = mapped_column(String(20), nullable=True)
    contact_type: Mapped[str | None] = mapped_column(String(50), nullable=True)

    def validate(self) -> None:
        owners = [self.user_id, self.client_id, self.supplier_id]
        ensure(any(o is not None for o in owners), "owner",
               "at least one of user_id, client_id or supplier_id is required")
        for field, value in (("user_id", self.user_id), ("client_id", self.client_id),
                             ("supplier_id", self.supplier_id)):
            if value is not None:
                ensure(is_positive_id(value), field, "must be greater than zero")
        ensure(not is_blank(self.contact_name), "contact_name", "is required")
        ensure(length_between(self.contact_name, 3, 100), "contact_name",
               "must have between 3 and 100 characters")
        if self.contact_position is not None:
            ensure(len(self.contact_position) <= 100, "contact_position", "must have at most 100 characters")
        if self.email:
            ensure(is_valid_email(self.email), "email", "invalid format")
        if self.phone:
            ensure(is_valid_phone(self.phone), "phone", "expected format (99) 9999-9999")
        if self.cell:
            ensure(is_valid_cell(self.cell), "cell", "expected format (99) 99999-9999")
        if self.contact_type is not None:
            ensure(len(self.contact_type) <= 50, "contact_type", "must have at most 50 characters")

    def __repr__(self) -> str:
        return f"<Contact(id={self.id!r}, contact_name={self.contact_name!r})>"
