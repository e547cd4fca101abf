"""Plain CRUD resources: categories, products, addresses and contacts."""
from fastapi import APIRouter

from ....repositories import (
    AddressRepository,
    ContactRepository,
    ProductCategoryRepository,
    ProductRepository,
    SupplierCategoryRepository,
    UserCategoryRepository,
)
from ..dependencies import entity_service
from ..schemas import (
    AddressDTO,
    ContactDTO,
    ProductCategoryDTO,
    ProductDTO,
    SupplierCategoryDTO,
    UserCategoryDTO,
)
from .entities import build_entity_router

router = APIRouter()

_RESOURCES = [
    ("/product-categories", ProductCategoryDTO, ProductCategoryRepository, "Product category", False),
    ("/supplier-categories", SupplierCategoryDTO, SupplierCategoryRepository, "Supplier category", False),
    ("/user-categories", UserCategoryDTO, UserCategoryRepository, "User category", False),
    ("/products", ProductDTO, ProductRepository, "Product", True),
    ("/addresses", AddressDTO, AddressRepository, "Address", False),
    ("/contacts", ContactDTO, ContactRepository, "Contact", False),
]

for prefix, dto, repository_cls, label, versioned in _RESOURCES:
    router.include_router(
        build_entity_router(
            prefix=prefix,
            tags=[prefix.strip("/")],
            dto=dto,
            service_provider=entity_service(repository_cls, label, versioned=versioned),
            label=label,
        )
    )
