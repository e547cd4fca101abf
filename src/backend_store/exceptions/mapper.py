import re
import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .integrity_classifier import classify_database_error
from .base import (
    ErrorKind,
    RepositoryError,
    DuplicateError,
    InvalidDataError,
    InvalidForeignKeyError,
)

logger = logging.getLogger(__name__)

# -----------------------
# Column extraction helpers
# -----------------------

_PG_NOT_NULL = re.compile(r'null value in column "(?P<col>[^"]+)"', re.IGNORECASE)
_PG_KEY = re.compile(r'key \((?P<cols>[^)]+)\)=', re.IGNORECASE)
_SQLITE_CONSTRAINT = re.compile(r'(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>.+)$', re.IGNORECASE)


def extract_columns(exc: DBAPIError) -> list[str] | None:
    """
    Best-effort extraction of the columns involved in a constraint violation:
      - Postgres: 'null value in column "email"' / 'DETAIL: Key (email)=(a@b.com) already exists.'
      - SQLite:   'UNIQUE constraint failed: clients.email'
    """
    orig = getattr(exc, "orig", None)
    msg = str(orig) if orig is not None else str(exc)
    if not msg:
        return None

    m = _PG_NOT_NULL.search(msg)
    if m:
        return [m.group("col")]

    m = _PG_KEY.search(msg)
    if m:
        return [c.strip().strip('"') for c in m.group("cols").split(",")]

    m = _SQLITE_CONSTRAINT.search(msg)
    if m:
        return [c.split(".")[-1].strip() for c in re.split(r",\s*", m.group("cols"))]

    return None


# -----------------------
# Mapper
# -----------------------

def map_integrity_error(
    exc: DBAPIError,
    model_name: str | None = None,
    *,
    on_duplicate: type[RepositoryError] = DuplicateError,
    fallback: type[RepositoryError] = RepositoryError,
) -> RepositoryError:
    """
    Translate a raw database error into the app-level exception to raise.

    `on_duplicate` lets join-table repositories report `RelationExistsError`
    instead of `DuplicateError`; `fallback` is used for anything unclassified.
    """
    kind, constraint_name = classify_database_error(exc)
    columns = extract_columns(exc)
    model_part = model_name or "Record"
    context = {"model": model_part, "fields": columns, "constraint": constraint_name}

    if kind is ErrorKind.DUPLICATE:
        # Expected client-level conflict (409), INFO is enough.
        logger.info("mapper.duplicate_detected", extra=context)
        if columns:
            message = f"{model_part} already exists for field(s): {', '.join(columns)}"
        else:
            message = f"{model_part} already exists"
        return on_duplicate(message, fields=columns, constraint=constraint_name)

    if kind is ErrorKind.INVALID_FOREIGN_KEY:
        logger.info("mapper.foreign_key_violation", extra=context)
        return InvalidForeignKeyError(
            f"{model_part} references a record that does not exist",
            fields=columns,
            constraint=constraint_name,
        )

    if kind is ErrorKind.INVALID_DATA:
        logger.info("mapper.invalid_data", extra=context)
        if columns:
            message = f"Invalid or missing field(s) for {model_part}: {', '.join(columns)}"
        else:
            message = f"{model_part} violates a data constraint"
        return InvalidDataError(message, fields=columns, constraint=constraint_name)

    raw = str(getattr(exc, "orig", None) or exc)
    logger.warning("mapper.unknown_database_error", extra={"model": model_part, "constraint": constraint_name})
    logger.debug("mapper.unknown_database_raw", extra={"model": model_part, "raw": raw})
    if hasattr(fallback, "wrap"):
        return fallback.wrap(exc)
    return fallback(f"{model_part} database error.")


# -----------------------
# Async context manager to DRY error handling in repositories
# -----------------------

async def _safe_rollback(db: AsyncSession, model_name: str | None) -> None:
    try:
        await db.rollback()
    except Exception:
        # A failing rollback is unusual; keep the stack for triage.
        logger.exception("mapper.rollback_failed", extra={"model": model_name})


@asynccontextmanager
async def db_error_handler(
    db: AsyncSession,
    model_name: str | None = None,
    *,
    on_duplicate: type[RepositoryError] = DuplicateError,
    fallback: type[RepositoryError] = RepositoryError,
):
    """
    Usage:
        async with db_error_handler(self.db, self.model.__name__, fallback=CreateError):
            ... DB ops that may raise ...

    - App-level `RepositoryError`s raised inside the block pass through untouched.
    - Database errors roll the session back and are mapped through `map_integrity_error`.
    - Anything else rolls back and is wrapped in `fallback`, chained to the cause.
    """
    try:
        yield
    except RepositoryError:
        raise
    except (IntegrityError, DBAPIError) as exc:
        await _safe_rollback(db, model_name)
        raise map_integrity_error(exc, model_name, on_duplicate=on_duplicate, fallback=fallback) from exc
    except Exception as exc:
        await _safe_rollback(db, model_name)
        logger.exception("mapper.unexpected_error", extra={"model": model_name})
        if hasattr(fallback, "wrap"):
            raise fallback.wrap(exc) from exc
        raise fallback(f"Failed to operate on {model_name or 'database'}") from exc
