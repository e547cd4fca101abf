"""
Application error taxonomy shared by repositories, services and HTTP handlers.

Every failure the store can report is a `RepositoryError` subclass carrying a
canonical `error_code` (an `ErrorKind`). Handlers never inspect messages: they
call `http_status()` and `to_payload()`, so the kind alone decides the response.
"""

from enum import Enum
from typing import Iterable


class ErrorKind(str, Enum):
    ZERO_ID = "zero_id"
    NIL_MODEL = "nil_model"
    INVALID_DATA = "invalid_data"
    NOT_FOUND = "not_found"
    DUPLICATE = "duplicate"
    RELATION_EXISTS = "relation_exists"
    INVALID_FOREIGN_KEY = "invalid_foreign_key"
    VERSION_CONFLICT = "version_conflict"
    RELATION_CHECK_FAILED = "relation_check_failed"
    CREATE_FAILED = "create_failed"
    UPDATE_FAILED = "update_failed"
    DELETE_FAILED = "delete_failed"
    GET_FAILED = "get_failed"
    SCAN_FAILED = "scan_failed"
    ITERATE_FAILED = "iterate_failed"
    TRANSACTION_FAILED = "transaction_failed"


class RepositoryError(Exception):
    """
    Base exception for repository/service errors.

    - message: human-friendly message (safe to show to clients)
    - fields: optional list of field names related to the error (e.g., ['email'])
    - constraint: optional DB constraint name (for logs only, never sent to clients)
    - error_code: canonical `ErrorKind` used for HTTP mapping
    """

    kind: ErrorKind | None = None
    default_message = "Repository error"

    ERROR_CODE_TO_STATUS = {
        ErrorKind.ZERO_ID: 400,
        ErrorKind.NIL_MODEL: 400,
        ErrorKind.INVALID_DATA: 400,
        ErrorKind.INVALID_FOREIGN_KEY: 400,
        ErrorKind.NOT_FOUND: 404,
        ErrorKind.DUPLICATE: 409,
        ErrorKind.RELATION_EXISTS: 409,
        ErrorKind.VERSION_CONFLICT: 409,
        # everything else (create/update/delete/get/scan/iterate/transaction failures) -> 500
    }

    def __init__(self, message: str | None = None, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None, error_code: ErrorKind | None = None):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.constraint = constraint
        self.error_code = error_code or self.kind

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.constraint:
            parts.append(f"constraint: {self.constraint}")
        if parts:
            return f"{base} ({'; '.join(parts)})"
        return base

    def to_payload(self) -> dict:
        """
        JSON-serializable details for the `data` member of the error envelope.
        The constraint name stays server-side.
        """
        payload: dict = {}
        if self.error_code:
            payload["code"] = self.error_code.value
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload

    def http_status(self) -> int:
        if self.error_code:
            return self.ERROR_CODE_TO_STATUS.get(self.error_code, 500)
        return 500


class ZeroIDError(RepositoryError):
    kind = ErrorKind.ZERO_ID
    default_message = "ID must be greater than zero"


class NilModelError(RepositoryError):
    kind = ErrorKind.NIL_MODEL
    default_message = "Model must not be empty"


class InvalidDataError(RepositoryError):
    kind = ErrorKind.INVALID_DATA
    default_message = "Invalid data"


class NotFoundError(RepositoryError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Not found"


class DuplicateError(RepositoryError):
    kind = ErrorKind.DUPLICATE
    default_message = "Record already exists"


class RelationExistsError(RepositoryError):
    kind = ErrorKind.RELATION_EXISTS
    default_message = "Relation already exists"


class InvalidForeignKeyError(RepositoryError):
    kind = ErrorKind.INVALID_FOREIGN_KEY
    default_message = "Referenced record does not exist"


class VersionConflictError(RepositoryError):
    kind = ErrorKind.VERSION_CONFLICT
    default_message = "Version conflict: the record was modified by someone else"


class WrappedOperationError(RepositoryError):
    """
    Failure of a whole operation category ("Create failed: <cause>").

    `wrap()` keeps the original exception reachable through `__cause__` when
    used as `raise CreateError.wrap(exc) from exc`.
    """

    prefix = "Operation failed"

    @classmethod
    def wrap(cls, exc: BaseException) -> "WrappedOperationError":
        fields = getattr(exc, "fields", None)
        return cls(f"{cls.prefix}: {exc}", fields=fields)


class RelationCheckError(WrappedOperationError):
    kind = ErrorKind.RELATION_CHECK_FAILED
    prefix = "Relation check failed"
    default_message = prefix


class CreateError(WrappedOperationError):
    kind = ErrorKind.CREATE_FAILED
    prefix = "Create failed"
    default_message = prefix


class UpdateError(WrappedOperationError):
    kind = ErrorKind.UPDATE_FAILED
    prefix = "Update failed"
    default_message = prefix


class DeleteError(WrappedOperationError):
    kind = ErrorKind.DELETE_FAILED
    prefix = "Delete failed"
    default_message = prefix


class GetError(WrappedOperationError):
    kind = ErrorKind.GET_FAILED
    prefix = "Get failed"
    default_message = prefix


class ScanError(WrappedOperationError):
    kind = ErrorKind.SCAN_FAILED
    prefix = "Scan failed"
    default_message = prefix


class IterateError(WrappedOperationError):
    kind = ErrorKind.ITERATE_FAILED
    prefix = "Iterate failed"
    default_message = prefix


class TransactionError(RepositoryError):
    """
    Transaction-level failure: invalid handle, failed commit, or a failed
    rollback reported together with the error that triggered it.

    When the triggering error is a `RepositoryError` its kind is kept, so a
    foreign-key failure still maps to 400 even if the rollback also broke.
    """

    kind = ErrorKind.TRANSACTION_FAILED
    default_message = "Transaction failed"

    def __init__(self, message: str | None = None, *, original: BaseException | None = None,
                 rollback_error: BaseException | None = None, error_code: ErrorKind | None = None,
                 fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code=error_code)
        self.original = original
        self.rollback_error = rollback_error

    @classmethod
    def combine(cls, original: BaseException, rollback_error: BaseException) -> "TransactionError":
        code = original.error_code if isinstance(original, RepositoryError) else None
        fields = original.fields if isinstance(original, RepositoryError) else None
        return cls(
            f"{original}; rollback error: {rollback_error}",
            original=original,
            rollback_error=rollback_error,
            error_code=code,
            fields=fields,
        )


def has_error_kind(exc: BaseException | None, kind: ErrorKind) -> bool:
    """
    Return True when `exc` or any exception in its `__cause__` chain carries `kind`.
    """
    seen: set[int] = set()
    while exc is not None and id(exc) not in seen:
        seen.add(id(exc))
        if getattr(exc, "error_code", None) == kind:
            return True
        exc = exc.__cause__
    return False


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
