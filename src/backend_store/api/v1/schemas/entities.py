"""DTOs for the single-table entities."""
from datetime import datetime

from ....models import (
    Address,
    Contact,
    Product,
    ProductCategory,
    Supplier,
    SupplierCategory,
    User,
    UserCategory,
)
from .base import ModelDTO


class CategoryDTO(ModelDTO):
    id: int | None = None
    name: str | None = None
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductCategoryDTO(CategoryDTO):
    orm_model = ProductCategory


class SupplierCategoryDTO(CategoryDTO):
    orm_model = SupplierCategory


class UserCategoryDTO(CategoryDTO):
    orm_model = UserCategory


class SupplierDTO(ModelDTO):
    orm_model = Supplier

    id: int | None = None
    name: str | None = None
    cnpj: str | None = None
    cpf: str | None = None
    description: str | None = None
    status: bool | None = None
    version: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductDTO(ModelDTO):
    orm_model = Product

    id: int | None = None
    supplier_id: int | None = None
    product_name: str | None = None
    manufacturer: str | None = None
    description: str | None = None
    cost_price: float = 0
    sale_price: float = 0
    stock_quantity: int = 0
    status: bool | None = None
    version: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserDTO(ModelDTO):
    orm_model = User

    id: int | None = None
    username: str | None = None
    email: str | None = None
    description: str | None = None
    status: bool | None = None
    version: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AddressDTO(ModelDTO):
    orm_model = Address

    id: int | None = None
    user_id: int | None = None
    client_id: int | None = None
    supplier_id: int | None = None
    street: str | None = None
    street_number: str | None = None
    complement: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    postal_code: str | None = None
    is_active: bool | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ContactDTO(ModelDTO):
    orm_model = Contact

    id: int | None = None
    user_id: int | None = None
    client_id: int | None = None
    supplier_id: int | None = None
    contact_name: str | None = None
    contact_position: str | None = None
    email: str | None = None
    phone: str | None = None
    cell: str | None = None
    contact_type: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
