"""
Aggregate services: create an entity together with its address, contact and
category relations in a single transaction.

Sequence (supplier variant):

    validate inputs            -> InvalidDataError, no transaction opened
    begin                      -> None handle is a TransactionError("invalid transaction")
    supplier
    address  (supplier_id set, validated inside the transaction)
    contact  (supplier_id set, validated inside the transaction)
    supplier-contact relation
    one supplier-category relation per category
    commit

Any exception on the way, including task cancellation, rolls the transaction
back before it propagates. A failing rollback is reported together with the
error that triggered it; a failing commit is rolled back and reported the
same way. Either every row is written or none is.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Protocol, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from ..database.transaction import Transaction
from ..exceptions.base import InvalidDataError, TransactionError
from ..models import Address, Contact, SupplierFull, UserFull
from ..repositories import (
    AddressRepository,
    ContactRepository,
    SupplierCategoryRelationRepository,
    SupplierContactRelationRepository,
    SupplierRepository,
    UserCategoryRelationRepository,
    UserRepository,
)
from ..validators.field_validators import is_positive_id

T = TypeVar("T")

logger = logging.getLogger(__name__)


class TransactionBeginner(Protocol):
    async def begin(self) -> Transaction | None: ...


class TransactionalService:
    """Runs a unit of work inside an explicit transaction with guaranteed rollback."""

    aggregate_name = "aggregate"

    def __init__(self, transactions: TransactionBeginner):
        self.transactions = transactions

    async def run_in_transaction(self, work: Callable[[Transaction], Awaitable[T]]) -> T:
        tx = await self.transactions.begin()
        if tx is None:
            logger.error("service.transaction.invalid", extra={"aggregate": self.aggregate_name})
            raise TransactionError("invalid transaction")

        try:
            result = await work(tx)
        except BaseException as exc:
            await self._rollback_after(tx, exc)
            raise

        await self._commit(tx)
        return result

    async def _rollback_after(self, tx: Transaction, exc: BaseException) -> None:
        try:
            await tx.rollback()
        except Exception as rb_exc:
            logger.exception("service.transaction.rollback_failed", extra={"aggregate": self.aggregate_name})
            if isinstance(exc, Exception):
                raise TransactionError.combine(exc, rb_exc) from exc
            # Cancellation / interpreter exit keep their own type.
            return
        if isinstance(exc, asyncio.CancelledError):
            logger.warning("service.transaction.cancelled", extra={"aggregate": self.aggregate_name})
        else:
            logger.info("service.transaction.rolled_back",
                        extra={"aggregate": self.aggregate_name, "error": type(exc).__name__})

    async def _commit(self, tx: Transaction) -> None:
        try:
            await tx.commit()
        except Exception as commit_exc:
            logger.exception("service.transaction.commit_failed", extra={"aggregate": self.aggregate_name})
            try:
                await tx.rollback()
            except Exception as rb_exc:
                raise TransactionError(
                    f"commit error: {commit_exc}; rollback error: {rb_exc}",
                    original=commit_exc,
                    rollback_error=rb_exc,
                ) from commit_exc
            raise TransactionError(f"commit error: {commit_exc}", original=commit_exc) from commit_exc

        logger.info("service.transaction.committed", extra={"aggregate": self.aggregate_name})


def _require_parts(owner: object | None, owner_field: str, address: Address | None,
                   contact: Contact | None, categories: list | None) -> None:
    if owner is None:
        raise InvalidDataError(f"{owner_field}: is required", fields=[owner_field])
    if address is None:
        raise InvalidDataError("address: is required", fields=["address"])
    if contact is None:
        raise InvalidDataError("contact: is required", fields=["contact"])
    if not categories:
        raise InvalidDataError("categories: at least one category is required", fields=["categories"])
    for category in categories:
        if category is None or not is_positive_id(getattr(category, "id", None)):
            raise InvalidDataError("categories: every category needs an ID greater than zero",
                                   fields=["categories"])


class SupplierFullService(TransactionalService):
    aggregate_name = "supplier_full"

    def __init__(
        self,
        transactions: TransactionBeginner,
        *,
        suppliers: Callable[[AsyncSession], SupplierRepository] = SupplierRepository,
        addresses: Callable[[AsyncSession], AddressRepository] = AddressRepository,
        contacts: Callable[[AsyncSession], ContactRepository] = ContactRepository,
        contact_relations: Callable[[AsyncSession], SupplierContactRelationRepository] = SupplierContactRelationRepository,
        category_relations: Callable[[AsyncSession], SupplierCategoryRelationRepository] = SupplierCategoryRelationRepository,
    ):
        super().__init__(transactions)
        self._suppliers = suppliers
        self._addresses = addresses
        self._contacts = contacts
        self._contact_relations = contact_relations
        self._category_relations = category_relations

    async def create_full(self, aggregate: SupplierFull | None) -> SupplierFull:
        if aggregate is None:
            raise InvalidDataError("supplier_full: is required", fields=["supplier_full"])
        _require_parts(aggregate.supplier, "supplier", aggregate.address, aggregate.contact, aggregate.categories)
        aggregate.supplier.validate()

        async def work(tx: Transaction) -> SupplierFull:
            supplier = await self._suppliers(tx.session).create(aggregate.supplier)

            aggregate.address.supplier_id = supplier.id
            aggregate.address.validate()
            address = await self._addresses(tx.session).create(aggregate.address)

            aggregate.contact.supplier_id = supplier.id
            aggregate.contact.validate()
            contact = await self._contacts(tx.session).create(aggregate.contact)

            await self._contact_relations(tx.session).create(supplier.id, contact.id)

            category_relations = self._category_relations(tx.session)
            for category in aggregate.categories:
                await category_relations.create(supplier.id, category.id)

            return SupplierFull(supplier=supplier, address=address, contact=contact,
                                categories=list(aggregate.categories))

        created = await self.run_in_transaction(work)
        logger.info("service.supplier_full.created",
                    extra={"supplier_id": created.supplier.id, "categories": len(created.categories)})
        return created


class UserFullService(TransactionalService):
    aggregate_name = "user_full"

    def __init__(
        self,
        transactions: TransactionBeginner,
        *,
        users: Callable[[AsyncSession], UserRepository] = UserRepository,
        addresses: Callable[[AsyncSession], AddressRepository] = AddressRepository,
        contacts: Callable[[AsyncSession], ContactRepository] = ContactRepository,
        category_relations: Callable[[AsyncSession], UserCategoryRelationRepository] = UserCategoryRelationRepository,
    ):
        super().__init__(transactions)
        self._users = users
        self._addresses = addresses
        self._contacts = contacts
        self._category_relations = category_relations

    async def create_full(self, aggregate: UserFull | None) -> UserFull:
        if aggregate is None:
            raise InvalidDataError("user_full: is required", fields=["user_full"])
        _require_parts(aggregate.user, "user", aggregate.address, aggregate.contact, aggregate.categories)
        aggregate.user.validate()

        async def work(tx: Transaction) -> UserFull:
            user = await self._users(tx.session).create(aggregate.user)

            aggregate.address.user_id = user.id
            aggregate.address.validate()
            address = await self._addresses(tx.session).create(aggregate.address)

            aggregate.contact.user_id = user.id
            aggregate.contact.validate()
            contact = await self._contacts(tx.session).create(aggregate.contact)

            category_relations = self._category_relations(tx.session)
            for category in aggregate.categories:
                await category_relations.create(user.id, category.id)

            return UserFull(user=user, address=address, contact=contact, categories=list(aggregate.categories))

        created = await self.run_in_transaction(work)
        logger.info("service.user_full.created",
                    extra={"user_id": created.user.id, "categories": len(created.categories)})
        return created
