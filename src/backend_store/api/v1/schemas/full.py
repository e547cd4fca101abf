"""Request/response bodies of the `/suppliers/full` and `/users/full` endpoints."""
from pydantic import BaseModel, ConfigDict

from ....models import SupplierCategory, SupplierFull, UserCategory, UserFull
from .entities import AddressDTO, ContactDTO, SupplierDTO, UserDTO


class CategoryRefDTO(BaseModel):
    """Reference to an existing category; only the id is used on input."""

    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    name: str | None = None


class SupplierFullDTO(BaseModel):
    supplier: SupplierDTO | None = None
    address: AddressDTO | None = None
    contact: ContactDTO | None = None
    categories: list[CategoryRefDTO] = []

    def to_model(self) -> SupplierFull:
        return SupplierFull(
            supplier=self.supplier.to_model(for_create=True) if self.supplier else None,
            address=self.address.to_model(for_create=True) if self.address else None,
            contact=self.contact.to_model(for_create=True) if self.contact else None,
            categories=[SupplierCategory(id=c.id, name=c.name) for c in self.categories],
        )

    @classmethod
    def from_model(cls, full: SupplierFull) -> "SupplierFullDTO":
        return cls(
            supplier=SupplierDTO.from_model(full.supplier) if full.supplier else None,
            address=AddressDTO.from_model(full.address) if full.address else None,
            contact=ContactDTO.from_model(full.contact) if full.contact else None,
            categories=[CategoryRefDTO.model_validate(c) for c in full.categories],
        )


class UserFullDTO(BaseModel):
    user: UserDTO | None = None
    address: AddressDTO | None = None
    contact: ContactDTO | None = None
    categories: list[CategoryRefDTO] = []

    def to_model(self) -> UserFull:
        return UserFull(
            user=self.user.to_model(for_create=True) if self.user else None,
            address=self.address.to_model(for_create=True) if self.address else None,
            contact=self.contact.to_model(for_create=True) if self.contact else None,
            categories=[UserCategory(id=c.id, name=c.name) for c in self.categories],
        )

    @classmethod
    def from_model(cls, full: UserFull) -> "UserFullDTO":
        return cls(
            user=UserDTO.from_model(full.user) if full.user else None,
            address=AddressDTO.from_model(full.address) if full.address else None,
            contact=ContactDTO.from_model(full.contact) if full.contact else None,
            categories=[CategoryRefDTO.model_validate(c) for c in full.categories],
        )
