"""Error Hierarchy — typed, categorized exceptions for all catalog failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors only (400-level); store failures surface as SQLAlchemy errors
      and are translated by api/error_handlers.py
    - to_response() produces the standard envelope: {success, message, errors}

Design Decisions:
    - Single hierarchy with LibraryError base: one FastAPI handler catches all
    - InvalidTokenError is credential-level; the auth gate re-raises it as UnauthorizedError
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Extra detail attached to an error response."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    field: str | None = None
    debug_info: dict[str, Any] | None = None


class LibraryError(Exception):
    """Base exception for all catalog errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the standard failure envelope."""
        errors: dict[str, Any] = {
            "code": self.code,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }
        if self.context.field:
            errors["field"] = self.context.field
        if self.context.debug_info:
            errors["details"] = self.context.debug_info
        return {"success": False, "message": self.message, "errors": errors}


# ─── Client Errors (400-level) ──────────────────────────────────

class UnauthorizedError(LibraryError):
    """Missing, invalid or expired credentials."""
    def __init__(self, message: str = "Unauthorized"):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, None, 401,
        )


class InvalidTokenError(LibraryError):
    """Token signature invalid, expired, or malformed."""
    def __init__(self, reason: str):
        super().__init__(
            f"Invalid token: {reason}", "INVALID_TOKEN",
            ErrorCategory.AUTHENTICATION, ErrorSeverity.WARNING, None, 401,
        )
        self.reason = reason


class ResourceNotFoundError(LibraryError):
    """Requested resource (or a referenced one) does not exist."""
    def __init__(self, resource_type: str, resource_id: object | None = None):
        context = ErrorContext(
            debug_info={"id": str(resource_id)} if resource_id is not None else None,
        )
        super().__init__(
            f"{resource_type} not found", "RESOURCE_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type


class ConflictError(LibraryError):
    """Unique constraint would be (or was) violated."""
    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ErrorContext(field=field), 409,
        )
