"""
FastAPI exception handlers that turn errors into the response envelope.

Status mapping lives on the exception classes (`http_status()`); the handlers
only log and wrap:

    ZeroIDError, NilModelError, InvalidDataError, InvalidForeignKeyError -> 400
    NotFoundError                                                        -> 404
    DuplicateError, RelationExistsError, VersionConflictError            -> 409
    anything else                                                        -> 500

Register them from the app factory:

    app = FastAPI()
    register_exception_handlers(app)
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ...core.responses import envelope
from ...exceptions.base import RepositoryError

logger = logging.getLogger(__name__)


async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    status = exc.http_status()
    extra = {"method": request.method, "path": request.url.path, "code": exc.error_code, "fields": exc.fields}
    if status >= 500:
        logger.error("http.error.repository", extra=extra, exc_info=exc)
    else:
        logger.info("http.error.repository", extra=extra)
    return envelope(status, exc.message, exc.to_payload())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON or wrongly typed fields/parameters."""
    logger.info("http.error.validation", extra={"method": request.method, "path": request.url.path})
    errors = [{"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")} for e in exc.errors()]
    return envelope(400, "Invalid request", errors)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return envelope(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Internals stay in the log.
    logger.error(
        "http.error.unhandled",
        extra={"method": request.method, "path": request.url.path},
        exc_info=exc,
    )
    return envelope(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RepositoryError, repository_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
