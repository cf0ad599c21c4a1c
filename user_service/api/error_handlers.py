"""Error Handlers — global exception handlers mapping errors to the envelope.

Invariants:
    - UserServiceError → its own status and {success: false, result: {error, code}}
    - RequestValidationError → 400 with field-level details
    - HTTPException (unknown route, wrong method) → its status, same envelope
    - Exception (catch-all) → 500, never leaks internal details
    - ExecutionError passes the driver message only when expose_error_details is on

Design Decisions:
    - Three-layer handler: domain, validation (Pydantic), catch-all
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from user_service.config import get_settings
from user_service.core.errors import (
    ErrorCategory, ErrorSeverity, ExecutionError, UserServiceError, error_envelope,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_service_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_service_error_handler(app: FastAPI) -> None:

    @app.exception_handler(UserServiceError)
    async def service_error_handler(request: Request, exc: UserServiceError):
        """Handle all domain and store errors."""
        log = logger.error if exc.http_status >= 500 else logger.info
        log(
            f"UserServiceError: {getattr(exc, 'detail', exc.message)}",
            extra=_request_extra(
                request,
                error_code=exc.code,
                category=exc.category.value,
                severity=exc.severity.value,
                user_id=exc.context.user_id,
            ),
        )
        if isinstance(exc, ExecutionError):
            content = exc.to_response(get_settings().expose_error_details)
        else:
            content = exc.to_response()
        return JSONResponse(status_code=exc.http_status, content=content)


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error: {exc.errors()}",
            extra=_request_extra(
                request,
                error_code="VALIDATION_ERROR",
                category=ErrorCategory.VALIDATION.value,
                severity=ErrorSeverity.WARNING.value,
            ),
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        """Unknown routes and disallowed methods, in the standard envelope."""
        return JSONResponse(
            status_code=exc.status_code,
            content=error_envelope(str(exc.detail), "HTTP_ERROR"),
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception: {exc}",
            exc_info=True,
            extra=_request_extra(
                request,
                error_code="INTERNAL_ERROR",
                category=ErrorCategory.INTERNAL.value,
                severity=ErrorSeverity.CRITICAL.value,
            ),
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_envelope(
                "An unexpected error occurred", "INTERNAL_ERROR",
            ),
        )


def _request_extra(request: Request, **fields: object) -> dict:
    """Log extras tying a record to the request that produced it."""
    return {"method": request.method, "path": request.url.path, **fields}


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    return error_envelope(
        "Invalid request data",
        "VALIDATION_ERROR",
        details=[
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ],
    )
