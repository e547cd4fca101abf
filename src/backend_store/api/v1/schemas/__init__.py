from .base import ModelDTO
from .client import ClientDTO, ClientFilterDTO, parse_date
from .entities import (
    AddressDTO,
    CategoryDTO,
    ContactDTO,
    ProductCategoryDTO,
    ProductDTO,
    SupplierCategoryDTO,
    SupplierDTO,
    UserCategoryDTO,
    UserDTO,
)
from .full import CategoryRefDTO, SupplierFullDTO, UserFullDTO
from .relations import (
    ProductCategoryRelationDTO,
    ProductCategoryRelationEnvelope,
    RelationDTO,
    SupplierCategoryRelationDTO,
    SupplierCategoryRelationEnvelope,
    SupplierContactRelationDTO,
    SupplierContactRelationEnvelope,
    UserCategoryRelationDTO,
    UserCategoryRelationEnvelope,
)

__all__ = [
    "ModelDTO",
    "ClientDTO",
    "ClientFilterDTO",
    "parse_date",
    "AddressDTO",
    "CategoryDTO",
    "ContactDTO",
    "ProductCategoryDTO",
    "ProductDTO",
    "SupplierCategoryDTO",
    "SupplierDTO",
    "UserCategoryDTO",
    "UserDTO",
    "CategoryRefDTO",
    "SupplierFullDTO",
    "UserFullDTO",
    "RelationDTO",
    "ProductCategoryRelationDTO",
    "ProductCategoryRelationEnvelope",
    "SupplierCategoryRelationDTO",
    "SupplierCategoryRelationEnvelope",
    "UserCategoryRelationDTO",
    "UserCategoryRelationEnvelope",
    "SupplierContactRelationDTO",
    "SupplierContactRelationEnvelope",
]
