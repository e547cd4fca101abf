"""
Classify raw database errors into the application's `ErrorKind`s.

Two levels are kept apart on purpose:

- this module answers "what exactly failed in the database?" (unique, foreign
  key, not-null, check) by reading Postgres SQLSTATE codes, falling back to
  message sniffing for backends that do not expose them (SQLite in tests);
- `mapper.py` turns that answer into the public exceptions raised by
  repositories (`DuplicateError`, `InvalidForeignKeyError`, ...).
"""
import logging
from enum import Enum

from .base import ErrorKind

logger = logging.getLogger(__name__)


# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    UNIQUE_VIOLATION = "23505"
    NOT_NULL_VIOLATION = "23502"
    FOREIGN_KEY_VIOLATION = "23503"
    CHECK_VIOLATION = "23514"


PGCODE_KIND_MAP = {
    PostgresErrorCodes.UNIQUE_VIOLATION.value: ErrorKind.DUPLICATE,
    PostgresErrorCodes.NOT_NULL_VIOLATION.value: ErrorKind.INVALID_DATA,
    PostgresErrorCodes.FOREIGN_KEY_VIOLATION.value: ErrorKind.INVALID_FOREIGN_KEY,
    PostgresErrorCodes.CHECK_VIOLATION.value: ErrorKind.INVALID_DATA,
}

_MESSAGE_RULES: tuple[tuple[ErrorKind, tuple[str, ...]], ...] = (
    (ErrorKind.DUPLICATE, ("unique constraint", "unique failed", "unique violation", "duplicate")),
    (ErrorKind.INVALID_FOREIGN_KEY, ("foreign key constraint", "foreign key", "is not present in table")),
    (ErrorKind.INVALID_DATA, ("not null constraint", "null value in column", "check constraint", "check failed")),
)


def _pgcode_of(orig) -> str | None:
    # psycopg exposes `pgcode`; the asyncpg adapter exposes `pgcode` and `sqlstate`
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def _constraint_name_of(orig) -> str | None:
    diag = getattr(orig, "diag", None)
    if diag is not None:
        name = getattr(diag, "constraint_name", None)
        if name:
            return name
    # asyncpg keeps the server error as the adapter's cause
    return getattr(getattr(orig, "__cause__", None), "constraint_name", None)


def _classify_from_postgres(orig) -> tuple[ErrorKind | None, str | None]:
    pgcode = _pgcode_of(orig)
    if not pgcode:
        return None, None

    constraint_name = _constraint_name_of(orig)
    kind = PGCODE_KIND_MAP.get(pgcode)
    if kind is not None:
        logger.debug("classifier.postgres", extra={"pgcode": pgcode, "constraint_name": constraint_name})
        return kind, constraint_name

    logger.warning("classifier.unknown_pgcode", extra={"pgcode": pgcode, "constraint_name": constraint_name})
    return None, constraint_name


def _classify_from_message(msg: str) -> ErrorKind | None:
    normalized = (msg or "").lower()
    for kind, keywords in _MESSAGE_RULES:
        if any(keyword in normalized for keyword in keywords):
            return kind
    return None


def classify_database_error(exc: BaseException) -> tuple[ErrorKind | None, str | None]:
    """
    Classify a SQLAlchemy `DBAPIError` (or anything with an `orig`) into an `ErrorKind`.

    Returns:
        (kind, constraint_name). `kind` is None for errors that are not
        constraint violations; the caller decides the generic fallback.
    """
    orig = getattr(exc, "orig", None)
    constraint_name = None

    if orig is not None:
        kind, constraint_name = _classify_from_postgres(orig)
        if kind is not None:
            return kind, constraint_name

    raw = str(orig) if orig is not None else str(exc)
    kind = _classify_from_message(raw)
    if kind is None:
        logger.debug("classifier.unclassified", extra={"message_snippet": raw[:200]})
    return kind, constraint_name
