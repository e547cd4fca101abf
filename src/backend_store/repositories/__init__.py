"""
Repository layer: the only code that talks SQL.

Usage:
    from backend_store.repositories import ClientRepository, SupplierCategoryRelationRepository
"""

from .base_repository import BaseRepository
from .client_repository import ClientRepository
from .entity_repositories import (
    ProductCategoryRepository,
    SupplierCategoryRepository,
    UserCategoryRepository,
    SupplierRepository,
    ProductRepository,
    UserRepository,
    AddressRepository,
    ContactRepository,
)
from .relation_repository import (
    RelationRepository,
    ProductCategoryRelationRepository,
    SupplierCategoryRelationRepository,
    UserCategoryRelationRepository,
    SupplierContactRelationRepository,
)

__all__ = [
    "BaseRepository",
    "ClientRepository",
    "ProductCategoryRepository",
    "SupplierCategoryRepository",
    "UserCategoryRepository",
    "SupplierRepository",
    "ProductRepository",
    "UserRepository",
    "AddressRepository",
    "ContactRepository",
    "RelationRepository",
    "ProductCategoryRelationRepository",
    "SupplierCategoryRelationRepository",
    "UserCategoryRelationRepository",
    "SupplierContactRelationRepository",
]
