from .base import (
    ErrorKind,
    RepositoryError,
    ZeroIDError,
    NilModelError,
    InvalidDataError,
    NotFoundError,
    DuplicateError,
    RelationExistsError,
    InvalidForeignKeyError,
    VersionConflictError,
    WrappedOperationError,
    RelationCheckError,
    CreateError,
    UpdateError,
    DeleteError,
    GetError,
    ScanError,
    IterateError,
    TransactionError,
    has_error_kind,
)

__all__ = [
    "ErrorKind",
    "RepositoryError",
    "ZeroIDError",
    "NilModelError",
    "InvalidDataError",
    "NotFoundError",
    "DuplicateError",
    "RelationExistsError",
    "InvalidForeignKeyError",
    "VersionConflictError",
    "WrappedOperationError",
    "RelationCheckError",
    "CreateError",
    "UpdateError",
    "DeleteError",
    "GetError",
    "ScanError",
    "IterateError",
    "TransactionError",
    "has_error_kind",
]

# exceptions/
# ├── base.py                    # ErrorKind + app-level errors (DuplicateError, NotFoundError, ...)
# ├── integrity_classifier.py    # raw DB error -> ErrorKind
# └── mapper.py                  # ErrorKind -> app-level error, db_error_handler
