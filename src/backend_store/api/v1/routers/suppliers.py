from fastapi import APIRouter, Depends, status

from ....core.responses import envelope
from ....exceptions.base import NilModelError
from ....repositories import SupplierRepository
from ....services import SupplierFullService
from ..dependencies import entity_service, get_supplier_full_service
from ..schemas import SupplierDTO, SupplierFullDTO
from .entities import build_entity_router

router = APIRouter(prefix="/suppliers", tags=["suppliers"])


@router.post("/full", status_code=status.HTTP_201_CREATED)
async def create_supplier_full(payload: SupplierFullDTO | None = None,
                               service: SupplierFullService = Depends(get_supplier_full_service)):
    """Supplier, address, contact and category relations in one transaction."""
    if payload is None:
        raise NilModelError("supplier_full must not be empty")
    created = await service.create_full(payload.to_model())
    return envelope(status.HTTP_201_CREATED, "Supplier created successfully", SupplierFullDTO.from_model(created))


build_entity_router(
    prefix="/suppliers",
    tags=["suppliers"],
    dto=SupplierDTO,
    service_provider=entity_service(SupplierRepository, "Supplier", versioned=True),
    label="Supplier",
    router=router,
)
