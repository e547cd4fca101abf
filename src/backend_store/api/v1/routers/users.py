from fastapi import APIRouter, Depends, status

from ....core.responses import envelope
from ....exceptions.base import NilModelError
from ....repositories import UserRepository
from ....services import UserFullService
from ..dependencies import entity_service, get_user_full_service
from ..schemas import UserDTO, UserFullDTO
from .entities import build_entity_router

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/full", status_code=status.HTTP_201_CREATED)
async def create_user_full(payload: UserFullDTO | None = None,
                           service: UserFullService = Depends(get_user_full_service)):
    if payload is None:
        raise NilModelError("user_full must not be empty")
    created = await service.create_full(payload.to_model())
    return envelope(status.HTTP_201_CREATED, "User created successfully", UserFullDTO.from_model(created))


build_entity_router(
    prefix="/users",
    tags=["users"],
    dto=UserDTO,
    service_provider=entity_service(UserRepository, "User", versioned=True),
    label="User",
    router=router,
)
