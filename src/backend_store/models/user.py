from sqlalchemy import String, Boolean
from sqlalchemy.orm import Mapped, mapped_column

from ..database.base import Base, BigIntPK
from ..validators.field_validators import is_blank, length_between, is_valid_email
from .mixins import TimestampMixin, VersionMixin, ensure


class User(TimestampMixin, VersionMixin, Base):
    """
    SQLAlchemy model for an operator of the store.

    Credentials are out of scope here; a user is a profile that can be
    classified into user categories and owns an address and a contact.
    """
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)

    username: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,  # Indexed for faster lookups
        nullable=False
    )

    email: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False
    )

    description: Mapped[str | None] = mapped_column(String(500), nullable=True)

    status: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def validate(self) -> None:
        ensure(not is_blank(self.username), "username", "is required")
        ensure(length_between(self.username, 3, 50), "username", "must have between 3 and 50 characters")
        ensure(not is_blank(self.email), "email", "is required")
        ensure(is_valid_email(self.email), "email", "invalid format")

    def __repr__(self) -> str:
        return f"<User(id={self.id!r}, username={self.username!r}, email={self.email!r})>"
