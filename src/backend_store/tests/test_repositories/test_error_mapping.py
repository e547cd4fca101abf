"""
Raw database errors -> application errors, without a Postgres server.

Postgres errors are faked with an `orig` carrying `pgcode` and `diag`, the
same attributes the psycopg/asyncpg adapters expose.
"""
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError

from backend_store.exceptions import (
    CreateError,
    DuplicateError,
    ErrorKind,
    InvalidDataError,
    InvalidForeignKeyError,
    RelationExistsError,
)
from backend_store.exceptions.integrity_classifier import classify_database_error
from backend_store.exceptions.mapper import extract_columns, map_integrity_error
from backend_store.models import Client
from backend_store.repositories import ClientRepository


class FakePgError(Exception):
    def __init__(self, message: str, pgcode: str, constraint_name: str | None = None):
        super().__init__(message)
        self.pgcode = pgcode
        self.diag = SimpleNamespace(constraint_name=constraint_name)


def fake_integrity_error(message: str, pgcode: str, constraint_name: str | None = None) -> IntegrityError:
    return IntegrityError("INSERT ...", params={}, orig=FakePgError(message, pgcode, constraint_name))


@pytest.mark.parametrize(
    "pgcode, expected",
    [
        ("23505", ErrorKind.DUPLICATE),
        ("23503", ErrorKind.INVALID_FOREIGN_KEY),
        ("23502", ErrorKind.INVALID_DATA),
        ("23514", ErrorKind.INVALID_DATA),
        ("40001", None),
    ],
)
def test_classify_by_pgcode(pgcode, expected):
    kind, constraint = classify_database_error(fake_integrity_error("boom", pgcode, "some_constraint"))

    assert kind == expected
    assert constraint == "some_constraint"


@pytest.mark.parametrize(
    "message, expected",
    [
        ("UNIQUE constraint failed: clients.email", ErrorKind.DUPLICATE),
        ("FOREIGN KEY constraint failed", ErrorKind.INVALID_FOREIGN_KEY),
        ("NOT NULL constraint failed: clients.name", ErrorKind.INVALID_DATA),
        ("disk I/O error", None),
    ],
)
def test_classify_by_message_without_pgcode(message, expected):
    exc = IntegrityError("INSERT ...", params={}, orig=Exception(message))

    kind, constraint = classify_database_error(exc)

    assert kind == expected
    assert constraint is None


def test_extract_columns_from_postgres_detail():
    exc = fake_integrity_error(
        'duplicate key value violates unique constraint "uq_clients_email"\n'
        "DETAIL:  Key (email)=(a@b.com) already exists.",
        "23505",
    )

    assert extract_columns(exc) == ["email"]


def test_extract_columns_from_sqlite_message():
    exc = IntegrityError("INSERT ...", params={}, orig=Exception("UNIQUE constraint failed: clients.cpf"))

    assert extract_columns(exc) == ["cpf"]


def test_map_duplicate_on_join_table_uses_relation_exists():
    exc = fake_integrity_error("duplicate key", "23505", "pk_supplier_category_relations")

    mapped = map_integrity_error(exc, "SupplierCategoryRelation", on_duplicate=RelationExistsError)

    assert isinstance(mapped, RelationExistsError)
    assert mapped.constraint == "pk_supplier_category_relations"
    # constraint names stay out of the client payload
    assert "constraint" not in mapped.to_payload()


def test_map_foreign_key_and_not_null():
    fk = map_integrity_error(fake_integrity_error("fk", "23503"), "Product")
    not_null = map_integrity_error(fake_integrity_error('null value in column "name"', "23502"), "Client")

    assert isinstance(fk, InvalidForeignKeyError)
    assert isinstance(not_null, InvalidDataError)
    assert not_null.fields == ["name"]


def test_map_unknown_error_uses_fallback():
    mapped = map_integrity_error(fake_integrity_error("serialization", "40001"), "Client", fallback=CreateError)

    assert isinstance(mapped, CreateError)
    assert str(mapped).startswith("Create failed:")
    assert mapped.http_status() == 500


@pytest.mark.asyncio
async def test_repository_maps_postgres_unique_violation():
    """
    Behavior:
      - `flush()` fails the way asyncpg reports a unique violation.
      - The repository rolls the session back and raises DuplicateError naming the column.
    """
    async def failing_flush(*args, **kwargs):
        raise fake_integrity_error(
            'duplicate key value violates unique constraint "uq_clients_email"\n'
            "DETAIL:  Key (email)=(x@y.com) already exists.",
            "23505",
            "uq_clients_email",
        )

    session = SimpleNamespace(add=lambda entity: None, flush=failing_flush, refresh=AsyncMock(), rollback=AsyncMock())
    repository = ClientRepository(session)

    with pytest.raises(DuplicateError) as exc_info:
        await repository.create(Client(name="Dup", email="x@y.com"))

    assert exc_info.value.fields == ["email"]
    assert exc_info.value.constraint == "uq_clients_email"
    assert isinstance(exc_info.value.__cause__, IntegrityError)
    session.rollback.assert_awaited_once()
    session.refresh.assert_not_awaited()
