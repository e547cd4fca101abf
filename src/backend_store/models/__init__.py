r"""
Single import point for every ORM model, so `Base.metadata` knows all tables
once this package is imported:

    from backend_store.models import Client, Supplier, SupplierCategoryRelation
"""

from .category import ProductCategory, SupplierCategory, UserCategory
from .client import Client, ClientFilter, SORTABLE_CLIENT_FIELDS
from .supplier import Supplier
from .product import Product
from .user import User
from .address import Address
from .contact import Contact
from .relations import (
    ProductCategoryRelation,
    SupplierCategoryRelation,
    UserCategoryRelation,
    SupplierContactRelation,
)
from .aggregates import SupplierFull, UserFull

__all__ = [
    "ProductCategory",
    "SupplierCategory",
    "UserCategory",
    "Client",
    "ClientFilter",
    "SORTABLE_CLIENT_FIELDS",
    "Supplier",
    "Product",
    "User",
    "Address",
    "Contact",
    "ProductCategoryRelation",
    "SupplierCategoryRelation",
    "UserCategoryRelation",
    "SupplierContactRelation",
    "SupplierFull",
    "UserFull",
]
