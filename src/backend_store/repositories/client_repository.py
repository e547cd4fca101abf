import logging

from sqlalchemy import select, update, func

from ..exceptions.base import GetError, NotFoundError, UpdateError
from ..exceptions.mapper import db_error_handler
from ..models import Client, ClientFilter, SORTABLE_CLIENT_FIELDS
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ClientRepository(BaseRepository[Client]):
    """
    Client-specific repository.

    Adds filtered search, direct version lookup and status toggles on top of the
    generic CRUD inherited from BaseRepository.
    """

    model = Client

    async def get_all_filtered(self, criteria: ClientFilter) -> list[Client]:
        """
        Search clients. Text fields match case-insensitively by substring; date
        ranges are inclusive; an unknown `sort_by` falls back to `id`.
        """
        query = select(Client)

        if criteria.name:
            query = query.where(Client.name.ilike(f"%{criteria.name}%"))
        if criteria.email:
            query = query.where(Client.email.ilike(f"%{criteria.email}%"))
        if criteria.cpf:
            query = query.where(Client.cpf == criteria.cpf)
        if criteria.cnpj:
            query = query.where(Client.cnpj == criteria.cnpj)
        if criteria.status is not None:
            query = query.where(Client.status == criteria.status)
        if criteria.version is not None:
            query = query.where(Client.version == criteria.version)
        if criteria.created_from is not None:
            query = query.where(Client.created_at >= criteria.created_from)
        if criteria.created_to is not None:
            query = query.where(Client.created_at <= criteria.created_to)
        if criteria.updated_from is not None:
            query = query.where(Client.updated_at >= criteria.updated_from)
        if criteria.updated_to is not None:
            query = query.where(Client.updated_at <= criteria.updated_to)

        sort_by = criteria.sort_by if criteria.sort_by in SORTABLE_CLIENT_FIELDS else "id"
        if sort_by != criteria.sort_by:
            logger.warning("repo.client.filter.invalid_sort", extra={"sort_by": criteria.sort_by})
        column = getattr(Client, sort_by)
        query = query.order_by(column.desc() if criteria.sort_order.lower() == "desc" else column.asc())
        query = query.offset(criteria.offset).limit(criteria.limit)

        try:
            result = await self.db.execute(query)
            clients = list(result.scalars().all())
        except Exception as e:
            logger.error("repo.client.filter.failed")
            raise GetError.wrap(e) from e

        logger.debug("repo.client.filter", extra={"count": len(clients)})
        return clients

    async def get_version_by_id(self, client_id: int) -> int:
        try:
            result = await self.db.execute(select(Client.version).where(Client.id == client_id))
            version = result.scalar_one_or_none()
        except Exception as e:
            raise GetError.wrap(e) from e

        if version is None:
            raise NotFoundError(f"Client with ID {client_id} not found")
        return version

    async def set_status(self, client_id: int, status: bool) -> None:
        """Enable/disable a client; counts as a modification, so the version moves."""
        stmt = (
            update(Client)
            .where(Client.id == client_id)
            .values(status=status, version=Client.version + 1, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        async with db_error_handler(self.db, "Client", fallback=UpdateError):
            result = await self.db.execute(stmt)
            if result.rowcount == 0:
                raise NotFoundError(f"Client with ID {client_id} not found")

        logger.info("repo.client.status_changed", extra={"id": client_id, "status": status})
