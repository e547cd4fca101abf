"""Plain CRUD repositories: one per table, no behaviour beyond BaseRepository."""

from ..models import (
    ProductCategory,
    SupplierCategory,
    UserCategory,
    Supplier,
    Product,
    User,
    Address,
    Contact,
)
from .base_repository import BaseRepository


class ProductCategoryRepository(BaseRepository[ProductCategory]):
    model = ProductCategory


class SupplierCategoryRepository(BaseRepository[SupplierCategory]):
    model = SupplierCategory


class UserCategoryRepository(BaseRepository[UserCategory]):
    model = UserCategory


class SupplierRepository(BaseRepository[Supplier]):
    model = Supplier


class ProductRepository(BaseRepository[Product]):
    model = Product


class UserRepository(BaseRepository[User]):
    model = User


class AddressRepository(BaseRepository[Address]):
    model = Address


class ContactRepository(BaseRepository[Contact]):
    model = Contact
