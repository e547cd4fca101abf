"""
CRUD router factory shared by every single-table entity.

    POST   {prefix}            create          -> 201
    GET    {prefix}            list            -> 200 (limit/offset)
    GET    {prefix}/{id}       fetch           -> 200
    PUT    {prefix}/{id}       update          -> 200
    DELETE {prefix}/{id}       delete          -> 204
"""
from typing import Callable

from fastapi import APIRouter, Depends, Response, status

from ....core.responses import envelope
from ....exceptions.base import InvalidDataError, NilModelError
from ....services import EntityService
from ..schemas.base import ModelDTO


def build_entity_router(
    *,
    prefix: str,
    tags: list[str],
    dto: type[ModelDTO],
    service_provider: Callable[..., EntityService],
    label: str,
    router: APIRouter | None = None,
) -> APIRouter:
    """
    Attach the CRUD routes for one entity. Pass an existing `router` to add
    them after entity-specific routes (static paths must be declared before
    `/{entity_id}`).
    """
    router = router or APIRouter(prefix=prefix, tags=tags)

    @router.post("", status_code=status.HTTP_201_CREATED)
    async def create_entity(payload: dto | None = None, service: EntityService = Depends(service_provider)):
        if payload is None:
            raise NilModelError(f"{label} must not be empty")
        created = await service.create(payload.to_model(for_create=True))
        return envelope(status.HTTP_201_CREATED, f"{label} created successfully", dto.from_model(created))

    @router.get("")
    async def list_entities(limit: int = 0, offset: int = 0,
                            service: EntityService = Depends(service_provider)):
        items = await service.get_all(limit=limit, offset=offset)
        return envelope(status.HTTP_200_OK, f"{label} list retrieved", [dto.from_model(i) for i in items])

    @router.get("/{entity_id}")
    async def get_entity(entity_id: int, service: EntityService = Depends(service_provider)):
        entity = await service.get_by_id(entity_id)
        return envelope(status.HTTP_200_OK, f"{label} retrieved", dto.from_model(entity))

    @router.put("/{entity_id}")
    async def update_entity(entity_id: int, payload: dto | None = None,
                            service: EntityService = Depends(service_provider)):
        if payload is None:
            raise NilModelError(f"{label} must not be empty")
        if payload.id is not None and payload.id != entity_id:
            raise InvalidDataError("id: does not match the URL", fields=["id"])
        entity = payload.to_model()
        entity.id = entity_id
        updated = await service.update(entity)
        return envelope(status.HTTP_200_OK, f"{label} updated successfully", dto.from_model(updated))

    @router.delete("/{entity_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_entity(entity_id: int, service: EntityService = Depends(service_provider)):
        await service.delete(entity_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
