from datetime import datetime

from sqlalchemy import DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from ..exceptions.base import InvalidDataError


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )


class VersionMixin:
    """Optimistic concurrency: every successful update bumps `version`."""

    version: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        server_default="1"
    )


def ensure(condition: bool, field: str, message: str) -> None:
    """Raise InvalidDataError naming `field` when `condition` does not hold."""
    if not condition:
        raise InvalidDataError(f"{field}: {message}", fields=[field])
