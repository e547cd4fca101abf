"""
Every error kind maps to one HTTP status, always inside the response envelope.
The client service is replaced by a stub raising the error under test.
"""
import pytest

from backend_store.api.v1.dependencies import get_client_service
from backend_store.exceptions import (
    CreateError,
    DuplicateError,
    GetError,
    InvalidDataError,
    InvalidForeignKeyError,
    NilModelError,
    NotFoundError,
    RelationExistsError,
    TransactionError,
    VersionConflictError,
    ZeroIDError,
)


class RaisingClientService:
    def __init__(self, exc: Exception):
        self.exc = exc

    async def get_by_id(self, entity_id: int):
        raise self.exc


@pytest.mark.parametrize(
    "exc, status",
    [
        (ZeroIDError(), 400),
        (NilModelError(), 400),
        (InvalidDataError("name: is required", fields=["name"]), 400),
        (InvalidForeignKeyError(), 400),
        (NotFoundError("Client with ID 1 not found"), 404),
        (DuplicateError(fields=["email"]), 409),
        (RelationExistsError(), 409),
        (VersionConflictError(), 409),
        (GetError.wrap(RuntimeError("boom")), 500),
        (CreateError.wrap(DuplicateError()), 500),
        (TransactionError("invalid transaction"), 500),
        (RuntimeError("unexpected"), 500),
    ],
)
def test_error_kind_to_status(app, api_client, exc, status):
    app.dependency_overrides[get_client_service] = lambda: RaisingClientService(exc)

    response = api_client.get("/api/v1/clients/1")

    assert response.status_code == status
    body = response.json()
    assert body["status"] == status
    assert isinstance(body["message"], str) and body["message"]
    app.dependency_overrides.clear()


def test_transaction_error_keeps_original_kind(app, api_client):
    original = InvalidForeignKeyError("category missing")
    exc = TransactionError.combine(original, RuntimeError("connection reset"))
    app.dependency_overrides[get_client_service] = lambda: RaisingClientService(exc)

    response = api_client.get("/api/v1/clients/1")

    assert response.status_code == 400
    assert response.json()["data"]["code"] == "invalid_foreign_key"
    app.dependency_overrides.clear()


def test_unexpected_error_hides_internals(app, api_client):
    app.dependency_overrides[get_client_service] = lambda: RaisingClientService(RuntimeError("password=hunter2"))

    response = api_client.get("/api/v1/clients/1")

    assert response.json() == {"status": 500, "message": "Internal server error", "data": None}
    app.dependency_overrides.clear()


def test_malformed_json_is_bad_request(api_client):
    response = api_client.post(
        "/api/v1/clients", content=b'{"name": "Acme",', headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json()["status"] == 400


def test_wrong_path_type_is_bad_request(api_client):
    assert api_client.get("/api/v1/clients/abc").status_code == 400


def test_method_not_allowed(api_client):
    response = api_client.patch("/api/v1/products/1")

    assert response.status_code == 405
    assert response.json()["status"] == 405


def test_unknown_route_is_not_found(api_client):
    response = api_client.get("/api/v1/nothing-here")

    assert response.status_code == 404
    assert response.json()["status"] == 404


def test_error_payload_lists_fields(app, api_client):
    app.dependency_overrides[get_client_service] = lambda: RaisingClientService(
        DuplicateError("Client already exists for field(s): email", fields=["email"])
    )

    body = api_client.get("/api/v1/clients/1").json()

    assert body["message"] == "Client already exists for field(s): email"
    assert body["data"] == {"code": "duplicate", "fields": ["email"]}
    app.dependency_overrides.clear()
