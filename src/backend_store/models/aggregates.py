"""
Transient aggregates written in one transaction by the "full" services.
They are never persisted as such: each part goes to its own table.
"""
from dataclasses import dataclass, field

from .address import Address
from .category import SupplierCategory, UserCategory
from .contact import Contact
from .supplier import Supplier
from .user import User


@dataclass
class SupplierFull:
    supplier: Supplier | None = None
    address: Address | None = None
    contact: Contact | None = None
    categories: list[SupplierCategory] = field(default_factory=list)


@dataclass
class UserFull:
    user: User | None = None
    address: Address | None = None
    contact: Contact | None = None
    categories: list[UserCategory] = field(default_factory=list)
