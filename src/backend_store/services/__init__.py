from .base import translate_errors, require_positive_id
from .entity_service import EntityService
from .client_service import ClientService
from .relation_service import RelationService
from .full_service import TransactionalService, SupplierFullService, UserFullService

__all__ = [
    "translate_errors",
    "require_positive_id",
    "EntityService",
    "ClientService",
    "RelationService",
    "TransactionalService",
    "SupplierFullService",
    "UserFullService",
]
