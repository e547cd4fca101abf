from fastapi import APIRouter

from ....repositories import (
    ProductCategoryRelationRepository,
    SupplierCategoryRelationRepository,
    SupplierContactRelationRepository,
    UserCategoryRelationRepository,
)
from ..dependencies import relation_service
from ..schemas import (
    ProductCategoryRelationDTO,
    ProductCategoryRelationEnvelope,
    SupplierCategoryRelationDTO,
    SupplierCategoryRelationEnvelope,
    SupplierContactRelationDTO,
    SupplierContactRelationEnvelope,
    UserCategoryRelationDTO,
    UserCategoryRelationEnvelope,
)
from . import catalog, categories, clients, suppliers, users
from .categories import get_supplier_category_service
from .relations import build_relation_router

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(clients.router)
api_router.include_router(suppliers.router)
api_router.include_router(users.router)
api_router.include_router(catalog.router)
api_router.include_router(categories.router)

api_router.include_router(build_relation_router(
    parents="products",
    children="categories",
    body=ProductCategoryRelationEnvelope,
    dto=ProductCategoryRelationDTO,
    service_provider=relation_service(ProductCategoryRelationRepository, "product", "category"),
    label="Product category relation",
))
api_router.include_router(build_relation_router(
    parents="suppliers",
    children="categories",
    body=SupplierCategoryRelationEnvelope,
    dto=SupplierCategoryRelationDTO,
    service_provider=get_supplier_category_service,
    label="Supplier category relation",
))
api_router.include_router(build_relation_router(
    parents="users",
    children="categories",
    body=UserCategoryRelationEnvelope,
    dto=UserCategoryRelationDTO,
    service_provider=relation_service(UserCategoryRelationRepository, "user", "category"),
    label="User category relation",
))
api_router.include_router(build_relation_router(
    parents="suppliers",
    children="contacts",
    body=SupplierContactRelationEnvelope,
    dto=SupplierContactRelationDTO,
    service_provider=relation_service(SupplierContactRelationRepository, "supplier", "contact"),
    label="Supplier contact relation",
))

__all__ = ["api_router"]
