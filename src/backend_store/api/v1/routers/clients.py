from fastapi import APIRouter, Depends, Query, Response, status

from ....core.responses import envelope
from ....services import ClientService
from ..dependencies import get_client_service
from ..schemas import ClientDTO, ClientFilterDTO
from .entities import build_entity_router

router = APIRouter(prefix="/clients", tags=["clients"])


# Declared before the generic `/{entity_id}` routes.
@router.get("/filter")
async def filter_clients(criteria: ClientFilterDTO = Query(), service: ClientService = Depends(get_client_service)):
    clients = await service.get_all_filtered(criteria.to_model())
    return envelope(status.HTTP_200_OK, "Clients retrieved", [ClientDTO.from_model(c) for c in clients])


@router.get("/{client_id}/version")
async def get_client_version(client_id: int, service: ClientService = Depends(get_client_service)):
    version = await service.get_version_by_id(client_id)
    return envelope(status.HTTP_200_OK, "Client version retrieved", {"id": client_id, "version": version})


@router.get("/{client_id}/exists")
async def client_exists(client_id: int, service: ClientService = Depends(get_client_service)):
    exists = await service.exists(client_id)
    return envelope(status.HTTP_200_OK, "Client checked", {"id": client_id, "exists": exists})


@router.patch("/{client_id}/enable", status_code=status.HTTP_204_NO_CONTENT)
async def enable_client(client_id: int, service: ClientService = Depends(get_client_service)):
    await service.enable(client_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{client_id}/disable", status_code=status.HTTP_204_NO_CONTENT)
async def disable_client(client_id: int, service: ClientService = Depends(get_client_service)):
    await service.disable(client_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


build_entity_router(
    prefix="/clients",
    tags=["clients"],
    dto=ClientDTO,
    service_provider=get_client_service,
    label="Client",
    router=router,
)
