"""
Router factory for the many-to-many relations.

    POST   /{parents}/{parent_id}/{children}             create, 201 or 200 if it already existed
    GET    /{parents}/{parent_id}/{children}             list the parent's relations
    GET    /{parents}/{parent_id}/{children}/{child_id}  {"exists": bool}
    DELETE /{parents}/{parent_id}/{children}/{child_id}  204, 404 if the pair is absent
    DELETE /{parents}/{parent_id}/{children}             204, also when nothing was related
"""
from typing import Callable

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from ....core.responses import envelope
from ....exceptions.base import InvalidDataError
from ....services import RelationService
from ..schemas.relations import RelationDTO


def build_relation_router(
    *,
    parents: str,
    children: str,
    body: type[BaseModel],
    dto: type[RelationDTO],
    service_provider: Callable[..., RelationService],
    label: str,
) -> APIRouter:
    router = APIRouter(prefix=f"/{parents}/{{parent_id}}/{children}", tags=[f"{parents}-{children}"])

    @router.post("", status_code=status.HTTP_201_CREATED)
    async def create_relation(parent_id: int, payload: body | None = None,
                              service: RelationService = Depends(service_provider)):
        relation = payload.relation if payload is not None else None
        if relation is None:
            raise InvalidDataError("relation: is required", fields=["relation"])
        if relation.parent_id is not None and relation.parent_id != parent_id:
            raise InvalidDataError(f"{dto.parent_key}: does not match the URL", fields=[dto.parent_key])

        created, was_created = await service.create(parent_id, relation.child_id)
        if was_created:
            return envelope(status.HTTP_201_CREATED, f"{label} created", dto.from_model(created))
        return envelope(status.HTTP_200_OK, f"{label} already exists", dto.from_model(created))

    @router.get("")
    async def list_relations(parent_id: int, service: RelationService = Depends(service_provider)):
        relations = await service.get_all_by_parent_id(parent_id)
        return envelope(status.HTTP_200_OK, f"{label} list retrieved", [dto.from_model(r) for r in relations])

    @router.get("/{child_id}")
    async def relation_exists(parent_id: int, child_id: int, service: RelationService = Depends(service_provider)):
        exists = await service.has_relation(parent_id, child_id)
        return envelope(status.HTTP_200_OK, f"{label} checked", {"exists": exists})

    @router.delete("/{child_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_relation(parent_id: int, child_id: int, service: RelationService = Depends(service_provider)):
        await service.delete(parent_id, child_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.delete("", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_all_relations(parent_id: int, service: RelationService = Depends(service_provider)):
        await service.delete_all(parent_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
