"""Error Hierarchy — typed, categorized exceptions for all service failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - category and severity go to logs only; clients see error and code
    - Validation errors are 400, missing records 404, store failures 500
    - to_response() produces the same {success, result} envelope as every
      successful response

Design Decisions:
    - Single hierarchy with UserServiceError base: FastAPI global handler catches all
    - ExecutionError keeps the driver message on `detail`, separate from the
      client-facing `message` (opt-in pass-through via settings)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Request-scoped identifiers attached to an error for logging."""
    user_id: int | None = None


class UserServiceError(Exception):
    """Base exception for all user service errors."""

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
        return error_envelope(self.message, self.code)


def error_envelope(message: str, code: str, **extra: Any) -> dict:
    """Failure envelope shared by domain, validation and catch-all handlers."""
    return {
        "success": False,
        "result": {"error": message, "code": code, **extra},
    }


# ─── Validation Errors (400) ─────────────────────────────────────

class InputValidationError(UserServiceError):
    """Request input is missing, empty, or malformed."""
    def __init__(
        self, message: str, code: str = "VALIDATION_ERROR",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class UnknownFieldError(InputValidationError):
    """Field names outside the column allowlist."""
    def __init__(self, fields: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Unknown fields: {', '.join(fields)}", "UNKNOWN_FIELD", context,
        )
        self.fields = fields


class EmptyUpdateError(InputValidationError):
    """Update body carries no fields."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Empty body", "EMPTY_BODY", context)


# ─── Not Found (404) ─────────────────────────────────────────────

class ResourceNotFoundError(UserServiceError):
    """Requested resource does not exist."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, context, 404,
        )


class UserNotFoundError(ResourceNotFoundError):
    def __init__(self, user_id: int | None = None):
        super().__init__("User not found", ErrorContext(user_id=user_id))


class EmptyTableError(ResourceNotFoundError):
    def __init__(self):
        super().__init__("Empty table")


# ─── Store Errors (500) ──────────────────────────────────────────

class ExecutionError(UserServiceError):
    """Statement execution failed in the record store."""
    def __init__(
        self, detail: str, operation: str = "execute",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Record store {operation} failed",
            "EXECUTION_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.detail = detail
        self.operation = operation

    def to_response(self, expose_detail: bool = False) -> dict:
        if expose_detail:
            return error_envelope(self.detail, self.code)
        return super().to_response()
