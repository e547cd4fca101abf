from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import String, Boolean
from sqlalchemy.orm import Mapped, mapped_column

from ..database.base import Base, BigIntPK
from ..validators.field_validators import (
    is_blank,
    length_between,
    is_valid_email,
    is_valid_cpf,
    is_valid_cnpj,
)
from .mixins import TimestampMixin, VersionMixin, ensure


class Client(TimestampMixin, VersionMixin, Base):
    """
    A customer of the store, either a person (cpf) or a company (cnpj).
    """
    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    email: Mapped[str | None] = mapped_column(String(100), unique=True, nullable=True)

    cpf: Mapped[str | None] = mapped_column(String(14), unique=True, nullable=True)

    cnpj: Mapped[str | None] = mapped_column(String(18), unique=True, nullable=True)

    description: Mapped[str | None] = mapped_column(String(500), nullable=True)

    status: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def validate(self) -> None:
        ensure(not is_blank(self.name), "name", "is required")
        ensure(length_between(self.name, 2, 255), "name", "must have between 2 and 255 characters")
        if self.email is not None:
            ensure(is_valid_email(self.email), "email", "invalid format")
        if self.cpf is not None:
            ensure(is_valid_cpf(self.cpf), "cpf", "invalid format")
        if self.cnpj is not None:
            ensure(is_valid_cnpj(self.cnpj), "cnpj", "invalid format")
        ensure(not (self.cpf and self.cnpj), "cpf", "a client has either cpf or cnpj, not both")
        ensure(self.description is None or len(self.description) <= 500,
               "description", "must have at most 500 characters")

    def __repr__(self) -> str:
        return f"<Client(id={self.id!r}, name={self.name!r}, version={self.version!r})>"


SORTABLE_CLIENT_FIELDS = ("id", "name", "email", "cpf", "cnpj", "status", "version", "created_at", "updated_at")


@dataclass
class ClientFilter:
    """Search criteria for clients; None means "do not filter on this field"."""

    name: str | None = None
    email: str | None = None
    cpf: str | None = None
    cnpj: str | None = None
    status: bool | None = None
    version: int | None = None
    created_from: datetime | None = None
    created_to: datetime | None = None
    updated_from: datetime | None = None
    updated_to: datetime | None = None
    limit: int = 100
    offset: int = 0
    sort_by: str = "id"
    sort_order: str = "asc"
