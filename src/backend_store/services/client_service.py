import logging

from ..exceptions.base import GetError, NilModelError, UpdateError
from ..models import Client, ClientFilter
from ..repositories.client_repository import ClientRepository
from .base import require_positive_id, translate_errors
from .entity_service import EntityService

logger = logging.getLogger(__name__)


class ClientService(EntityService[Client]):
    def __init__(self, repository: ClientRepository):
        super().__init__(repository, "Client", versioned=True)

    async def get_all_filtered(self, criteria: ClientFilter | None) -> list[Client]:
        if criteria is None:
            raise NilModelError("Client filter must not be empty")
        with translate_errors(GetError):
            return list(await self.repository.get_all_filtered(criteria) or [])

    async def get_version_by_id(self, client_id: int) -> int:
        require_positive_id(client_id)
        with translate_errors(GetError):
            return await self.repository.get_version_by_id(client_id)

    async def exists(self, client_id: int) -> bool:
        require_positive_id(client_id)
        with translate_errors(GetError):
            return await self.repository.exists(client_id)

    async def enable(self, client_id: int) -> None:
        await self._set_status(client_id, True)

    async def disable(self, client_id: int) -> None:
        await self._set_status(client_id, False)

    async def _set_status(self, client_id: int, status: bool) -> None:
        require_positive_id(client_id)
        with translate_errors(UpdateError):
            await self.repository.set_status(client_id, status)
        logger.info("service.client.status", extra={"id": client_id, "status": status})
