"""Response Envelope — uniform {success, message, data?, errors?} body for every endpoint.

Invariants:
    - Success bodies always carry "data" (null for deletes)
    - Failure bodies always carry "errors" (null when there is nothing to add)
    - Pydantic models inside data are serialized by alias (genreId, createdAt, ...)
"""

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success_response(
    message: str, data: Any = None, status_code: int = 200,
) -> JSONResponse:
    """Wrap a successful result."""
    return JSONResponse(
        status_code=status_code,
        content={"success": True, "message": message, "data": jsonable_encoder(data)},
    )


def error_response(
    message: str, errors: Any = None, status_code: int = 400,
) -> JSONResponse:
    """Wrap a failure."""
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False, "message": message, "errors": jsonable_encoder(errors),
        },
    )
