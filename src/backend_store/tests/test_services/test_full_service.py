"""
Aggregate creation: ordering, rollback on every failure path, and an
end-to-end check on SQLite that a failed aggregate leaves no rows behind.
"""
import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import func, select

from backend_store.database.transaction import TransactionManager
from backend_store.exceptions import (
    ErrorKind,
    InvalidDataError,
    InvalidForeignKeyError,
    TransactionError,
)
from backend_store.models import (
    Address,
    Contact,
    Supplier,
    SupplierCategory,
    SupplierCategoryRelation,
    SupplierContactRelation,
    SupplierFull,
    User,
    UserCategory,
    UserFull,
)
from backend_store.services import SupplierFullService, UserFullService


def make_address() -> Address:
    return Address(street="Rua das Flores", street_number="100", city="Sao Paulo", state="SP",
                   country="Brasil", postal_code="01310-100")


def make_contact() -> Contact:
    return Contact(contact_name="Ana Souza", email="ana@parts.com", cell="(11) 91234-5678")


def make_supplier_full(category_ids=(1, 2)) -> SupplierFull:
    return SupplierFull(
        supplier=Supplier(name="Parts Supplier", cnpj="11.222.333/0001-44"),
        address=make_address(),
        contact=make_contact(),
        categories=[SupplierCategory(id=i) for i in category_ids],
    )


class FakeTransactions:
    """Hands out one mocked transaction and records it."""

    def __init__(self, tx=None, *, none: bool = False):
        self.tx = tx or SimpleNamespace(session=MagicMock(), commit=AsyncMock(), rollback=AsyncMock())
        self.none = none
        self.begin_calls = 0

    async def begin(self):
        self.begin_calls += 1
        return None if self.none else self.tx


class Repos:
    """Mocked repositories; each factory ignores the session it is given."""

    def __init__(self):
        self.suppliers = AsyncMock()
        self.addresses = AsyncMock()
        self.contacts = AsyncMock()
        self.contact_relations = AsyncMock()
        self.category_relations = AsyncMock()

        self.suppliers.create.side_effect = lambda s: _with_id(s, 7)
        self.addresses.create.side_effect = lambda a: _with_id(a, 11)
        self.contacts.create.side_effect = lambda c: _with_id(c, 13)

    def service(self, transactions) -> SupplierFullService:
        return SupplierFullService(
            transactions,
            suppliers=lambda session: self.suppliers,
            addresses=lambda session: self.addresses,
            contacts=lambda session: self.contacts,
            contact_relations=lambda session: self.contact_relations,
            category_relations=lambda session: self.category_relations,
        )


def _with_id(entity, entity_id):
    entity.id = entity_id
    return entity


@pytest.mark.asyncio
class TestSupplierFullServiceOrchestration:

    async def test_success_writes_every_part_and_commits(self):
        repos, transactions = Repos(), FakeTransactions()

        created = await repos.service(transactions).create_full(make_supplier_full())

        assert created.supplier.id == 7
        assert created.address.supplier_id == 7
        assert created.contact.supplier_id == 7
        repos.contact_relations.create.assert_awaited_once_with(7, 13)
        assert [c.args for c in repos.category_relations.create.await_args_list] == [(7, 1), (7, 2)]
        transactions.tx.commit.assert_awaited_once()
        transactions.tx.rollback.assert_not_awaited()

    async def test_failure_at_second_category_rolls_back(self):
        """
        Behavior:
          - The second category relation fails with a foreign key error.
          - The transaction is rolled back, never committed, and the original
            error reaches the caller unchanged.
        """
        repos, transactions = Repos(), FakeTransactions()
        repos.category_relations.create.side_effect = [None, InvalidForeignKeyError("category missing")]

        with pytest.raises(InvalidForeignKeyError):
            await repos.service(transactions).create_full(make_supplier_full())

        transactions.tx.rollback.assert_awaited_once()
        transactions.tx.commit.assert_not_awaited()

    async def test_failed_rollback_is_reported_with_the_original_error(self):
        repos, transactions = Repos(), FakeTransactions()
        repos.category_relations.create.side_effect = InvalidForeignKeyError("category missing")
        transactions.tx.rollback.side_effect = RuntimeError("connection reset")

        with pytest.raises(TransactionError) as exc_info:
            await repos.service(transactions).create_full(make_supplier_full())

        err = exc_info.value
        assert "category missing" in str(err)
        assert "rollback error: connection reset" in str(err)
        assert err.error_code == ErrorKind.INVALID_FOREIGN_KEY
        assert isinstance(err.original, InvalidForeignKeyError)
        assert isinstance(err.rollback_error, RuntimeError)

    async def test_failed_commit_rolls_back(self):
        repos, transactions = Repos(), FakeTransactions()
        transactions.tx.commit.side_effect = RuntimeError("disk full")

        with pytest.raises(TransactionError) as exc_info:
            await repos.service(transactions).create_full(make_supplier_full())

        assert str(exc_info.value).startswith("commit error: disk full")
        assert exc_info.value.http_status() == 500
        transactions.tx.rollback.assert_awaited_once()

    async def test_missing_transaction_is_an_error(self):
        repos, transactions = Repos(), FakeTransactions(none=True)

        with pytest.raises(TransactionError, match="invalid transaction"):
            await repos.service(transactions).create_full(make_supplier_full())

        repos.suppliers.create.assert_not_awaited()

    async def test_cancellation_still_rolls_back(self):
        repos, transactions = Repos(), FakeTransactions()
        repos.contacts.create.side_effect = asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await repos.service(transactions).create_full(make_supplier_full())

        transactions.tx.rollback.assert_awaited_once()
        transactions.tx.commit.assert_not_awaited()

    @pytest.mark.parametrize(
        "mutate, field",
        [
            (lambda full: setattr(full, "address", None), "address"),
            (lambda full: setattr(full, "contact", None), "contact"),
            (lambda full: setattr(full, "categories", []), "categories"),
            (lambda full: setattr(full, "categories", [SupplierCategory(id=0)]), "categories"),
            (lambda full: setattr(full.supplier, "name", ""), "name"),
        ],
    )
    async def test_incomplete_aggregate_never_opens_a_transaction(self, mutate, field):
        repos, transactions = Repos(), FakeTransactions()
        aggregate = make_supplier_full()
        mutate(aggregate)

        with pytest.raises(InvalidDataError) as exc_info:
            await repos.service(transactions).create_full(aggregate)

        assert exc_info.value.fields == [field]
        assert transactions.begin_calls == 0


@pytest.mark.asyncio
class TestFullServicesOnDatabase:

    async def _supplier_categories(self, session_maker) -> list[int]:
        async with session_maker() as session:
            categories = [SupplierCategory(name="Hardware"), SupplierCategory(name="Paint")]
            session.add_all(categories)
            await session.commit()
            return [c.id for c in categories]

    async def _count(self, session_maker, model) -> int:
        async with session_maker() as session:
            return (await session.execute(select(func.count()).select_from(model))).scalar_one()

    async def test_supplier_full_commits_everything(self, session_maker):
        category_ids = await self._supplier_categories(session_maker)
        service = SupplierFullService(TransactionManager(session_maker))

        created = await service.create_full(make_supplier_full(category_ids))

        assert created.supplier.id > 0
        assert await self._count(session_maker, Supplier) == 1
        assert await self._count(session_maker, Address) == 1
        assert await self._count(session_maker, SupplierContactRelation) == 1
        assert await self._count(session_maker, SupplierCategoryRelation) == 2

    async def test_supplier_full_with_unknown_category_leaves_no_rows(self, session_maker):
        """
        Behavior:
          - The last category does not exist, so the last relation insert fails.
          - Supplier, address, contact and the earlier relations are all gone.
        """
        category_ids = await self._supplier_categories(session_maker)
        service = SupplierFullService(TransactionManager(session_maker))

        with pytest.raises(InvalidForeignKeyError):
            await service.create_full(make_supplier_full([*category_ids, 9999]))

        for model in (Supplier, Address, Contact, SupplierContactRelation, SupplierCategoryRelation):
            assert await self._count(session_maker, model) == 0

    async def test_user_full_commits_everything(self, session_maker):
        async with session_maker() as session:
            category = UserCategory(name="Staff")
            session.add(category)
            await session.commit()
            category_id = category.id

        service = UserFullService(TransactionManager(session_maker))
        created = await service.create_full(UserFull(
            user=User(username="joana", email="joana@example.com"),
            address=make_address(),
            contact=make_contact(),
            categories=[UserCategory(id=category_id)],
        ))

        assert created.user.id > 0
        assert created.address.user_id == created.user.id
        assert created.contact.user_id == created.user.id
        assert await self._count(session_maker, User) == 1
