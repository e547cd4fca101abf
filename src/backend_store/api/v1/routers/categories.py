from fastapi import APIRouter, Depends, status

from ....core.responses import envelope
from ....repositories import SupplierCategoryRelationRepository
from ....services import RelationService
from ..dependencies import relation_service
from ..schemas import SupplierCategoryRelationDTO

router = APIRouter(prefix="/categories", tags=["suppliers-categories"])

get_supplier_category_service = relation_service(SupplierCategoryRelationRepository, "supplier", "category")


@router.get("/{child_id}/suppliers")
async def list_suppliers_by_category(child_id: int,
                                     service: RelationService = Depends(get_supplier_category_service)):
    relations = await service.get_all_by_child_id(child_id)
    return envelope(
        status.HTTP_200_OK,
        "Supplier category relation list retrieved",
        [SupplierCategoryRelationDTO.from_model(r) for r in relations],
    )
