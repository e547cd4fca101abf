"""
Service providers for the routers.

Single-entity and relation services share the request session from
`get_async_session` (committed when the handler returns). The aggregate
services get a `TransactionManager` instead and run on their own session.
"""
from typing import Callable

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ...database.session import get_async_session
from ...database.transaction import TransactionManager
from ...repositories import BaseRepository, ClientRepository, RelationRepository
from ...services import ClientService, EntityService, RelationService, SupplierFullService, UserFullService


def entity_service(repository_cls: type[BaseRepository], entity_name: str,
                   *, versioned: bool = False) -> Callable[..., EntityService]:
    def provide(db: AsyncSession = Depends(get_async_session)) -> EntityService:
        return EntityService(repository_cls(db), entity_name, versioned=versioned)

    return provide


def relation_service(repository_cls: type[RelationRepository], parent_name: str,
                     child_name: str) -> Callable[..., RelationService]:
    def provide(db: AsyncSession = Depends(get_async_session)) -> RelationService:
        return RelationService(repository_cls(db), parent_name, child_name)

    return provide


def get_client_service(db: AsyncSession = Depends(get_async_session)) -> ClientService:
    return ClientService(ClientRepository(db))


def get_transaction_manager(request: Request) -> TransactionManager:
    return TransactionManager(request.app.state.session_maker)


def get_supplier_full_service(
    transactions: TransactionManager = Depends(get_transaction_manager),
) -> SupplierFullService:
    return SupplierFullService(transactions)


def get_user_full_service(
    transactions: TransactionManager = Depends(get_transaction_manager),
) -> UserFullService:
    return UserFullService(transactions)
