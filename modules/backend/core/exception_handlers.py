"""
Exception Handlers.

FastAPI exception handlers that convert application exceptions to JSON
responses. All exceptions are logged.

Response bodies:
    ValidationError / request validation  → {field: [message, ...]}
    every other error                     → {"error": message}

Usage:
    from modules.backend.core.exception_handlers import register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from modules.backend.core.exceptions import (
    ApplicationError,
    ConflictError,
    DatabaseError,
    MissingParameterError,
    NotFoundError,
    ValidationError,
)
from modules.backend.core.logging import get_logger

logger = get_logger(__name__)

# Map exception types to HTTP status codes
EXCEPTION_STATUS_MAP: dict[type[ApplicationError], int] = {
    MissingParameterError: 400,
    NotFoundError: 404,
    ConflictError: 409,
    ValidationError: 422,
    DatabaseError: 503,
}


def _get_request_id(request: Request) -> str | None:
    """Extract request ID from request state or headers."""
    # Try request state first (set by middleware)
    if hasattr(request.state, "request_id"):
        return request.state.request_id
    return request.headers.get("x-request-id")


def _error_field(loc: tuple[Any, ...]) -> str:
    """Name the offending field from a pydantic error location."""
    names = [str(part) for part in loc if not isinstance(part, int)]
    return names[-1] if names else "base"


def error_messages_by_field(errors: list[dict[str, Any]]) -> dict[str, list[str]]:
    """Group pydantic error entries into a field → messages mapping."""
    grouped: dict[str, list[str]] = {}
    for err in errors:
        field = _error_field(tuple(err.get("loc", ())))
        grouped.setdefault(field, []).append(err.get("msg", "is invalid"))
    return grouped


async def application_error_handler(
    request: Request,
    exc: ApplicationError,
) -> JSONResponse:
    """
    Handle all ApplicationError subclasses.

    Converts application exceptions to JSON responses with
    appropriate HTTP status codes.
    """
    status_code = EXCEPTION_STATUS_MAP.get(type(exc), 500)
    request_id = _get_request_id(request)

    log_extra = {
        "code": exc.code,
        "message": exc.message,
        "status": status_code,
        "path": request.url.path,
        "method": request.method,
    }
    if request_id:
        log_extra["request_id"] = request_id

    if status_code >= 500:
        logger.error("Server error", extra=log_extra)
    else:
        logger.warning("Client error", extra=log_extra)

    if isinstance(exc, ValidationError):
        content: dict[str, Any] = exc.details
    else:
        content = {"error": exc.message}

    return JSONResponse(status_code=status_code, content=content)


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Handle FastAPI/Pydantic request validation errors.

    Payloads with wrongly typed fields are reported in the same
    field → messages shape as entity validation failures.
    """
    errors = exc.errors()

    logger.warning(
        "Request validation failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_count": len(errors),
            "request_id": _get_request_id(request),
        },
    )

    return JSONResponse(
        status_code=422,
        content=error_messages_by_field(list(errors)),
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Catches all unhandled exceptions and returns a generic error
    response. Internal details are never exposed.
    """
    logger.exception(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
            "request_id": _get_request_id(request),
        },
    )

    return JSONResponse(
        status_code=500,
        content={"error": "An unexpected error occurred"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    logger.debug("Exception handlers registered")
