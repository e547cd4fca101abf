from sqlalchemy import String, Boolean
from sqlalchemy.orm import Mapped, mapped_column

from ..database.base import Base, BigIntPK
from ..validators.field_validators import is_blank, length_between, is_valid_cpf, is_valid_cnpj
from .mixins import TimestampMixin, VersionMixin, ensure


class Supplier(TimestampMixin, VersionMixin, Base):
    __tablename__ = "suppliers"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    cnpj: Mapped[str | None] = mapped_column(String(18), unique=True, nullable=True)

    cpf: Mapped[str | None] = mapped_column(String(14), unique=True, nullable=True)

    description: Mapped[str | None] = mapped_column(String(500), nullable=True)

    status: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def validate(self) -> None:
        ensure(not is_blank(self.name), "name", "is required")
        ensure(length_between(self.name, 2, 255), "name", "must have between 2 and 255 characters")
        if self.cnpj is not None:
            ensure(is_valid_cnpj(self.cnpj), "cnpj", "invalid format")
        if self.cpf is not None:
            ensure(is_valid_cpf(self.cpf), "cpf", "invalid format")

    def __repr__(self) -> str:
        return f"<Supplier(id={self.id!r}, name={self.name!r})>"
