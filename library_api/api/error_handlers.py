"""Error Handlers — global exception handlers translating failures into envelopes.

Invariants:
    - LibraryError -> its own http_status + envelope
    - RequestValidationError -> 400 with field-level details
    - Starlette HTTPException (unknown route, wrong method) -> envelope
    - IntegrityError: unique violation -> 409, anything else -> 500 with driver message
    - NoResultFound / StaleDataError (row vanished on update/delete) -> 404
    - Exception (catch-all) -> 500
    - Every failure is logged before the response is written

Design Decisions:
    - Unique violations recognized by SQLSTATE 23505 (PostgreSQL) or SQLite's
      "UNIQUE constraint failed" message
    - Handlers registered per layer, split into small functions
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, NoResultFound
from sqlalchemy.orm.exc import StaleDataError
from starlette.exceptions import HTTPException as StarletteHTTPException

from library_api.core.errors import LibraryError
from library_api.schemas.envelope import error_response

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION_SQLSTATE = "23505"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_library_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_store_error_handlers(app)
    _register_generic_error_handler(app)


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the store rejected a write because of a unique constraint."""
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == UNIQUE_VIOLATION_SQLSTATE:
        return True
    return "UNIQUE constraint failed" in str(orig)


def _register_library_error_handler(app: FastAPI) -> None:

    @app.exception_handler(LibraryError)
    async def library_error_handler(request: Request, exc: LibraryError):
        """Handle all catalog domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"LibraryError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "method": request.method,
                "status_code": exc.http_status,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors (missing or malformed input)."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return error_response(
            "Invalid request data",
            _build_validation_details(exc),
            status.HTTP_400_BAD_REQUEST,
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        logger.warning(
            f"HTTP {exc.status_code} on {request.url.path}: {exc.detail}",
            extra={"path": request.url.path, "status_code": exc.status_code},
        )
        response = error_response(str(exc.detail), None, exc.status_code)
        if exc.headers:
            response.headers.update(exc.headers)
        return response


def _register_store_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):
        """Store constraint rejected the write."""
        if is_unique_violation(exc):
            logger.warning(
                f"Unique constraint violated on {request.url.path}: {exc.orig}",
                extra={"error_code": "CONFLICT", "path": request.url.path},
            )
            return error_response(
                "Data already exists", {"code": "CONFLICT"},
                status.HTTP_409_CONFLICT,
            )
        logger.error(
            f"Integrity error on {request.url.path}: {exc.orig}",
            extra={"error_code": "DATABASE_ERROR", "path": request.url.path},
        )
        return error_response(
            str(exc.orig), {"code": "DATABASE_ERROR"},
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    async def missing_row_handler(request: Request, exc: Exception):
        """Row disappeared between lookup and update/delete."""
        logger.warning(
            f"Row not found on {request.url.path}: {exc}",
            extra={"error_code": "RESOURCE_NOT_FOUND", "path": request.url.path},
        )
        return error_response(
            "Data not found", {"code": "RESOURCE_NOT_FOUND"},
            status.HTTP_404_NOT_FOUND,
        )

    app.add_exception_handler(NoResultFound, missing_row_handler)
    app.add_exception_handler(StaleDataError, missing_row_handler)


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all for anything unanticipated."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        )
        return error_response(
            str(exc) or "Internal server error", {"code": "INTERNAL_ERROR"},
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


def _build_validation_details(exc: RequestValidationError) -> list[dict]:
    return [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
