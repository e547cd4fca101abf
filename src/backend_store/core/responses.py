"""
The single response shape of the API:

    {"status": <http status>, "message": <human readable>, "data": <payload or null>}
"""
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def envelope(status: int, message: str, data: Any = None, headers: dict[str, str] | None = None) -> JSONResponse:
    body = {"status": status, "message": message, "data": data}
    return JSONResponse(status_code=status, content=jsonable_encoder(body), headers=headers)
