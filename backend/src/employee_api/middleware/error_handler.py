"""Global error handling: maps exceptions to enveloped JSON responses.

Client errors (not found, conflict, validation) carry the domain message.
Internal failures are logged in full and answered with a generic message.
"""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from employee_api.config import get_settings
from employee_api.exceptions import (
    DuplicateResourceError,
    EmployeeAPIError,
    ResourceNotFoundError,
    ValidationError,
)
from employee_api.models.dto.common import ApiResponse
from employee_api.utils.secure_logging import log_error, log_warning

logger = logging.getLogger(__name__)

# Safe error messages that can be shown to users
SAFE_ERROR_MESSAGES = {
    400: "Invalid request",
    404: "Resource not found",
    405: "Method not allowed",
    409: "Conflict with existing resource",
    422: "Invalid input data",
    429: "Too many requests",
    500: "Internal server error",
    503: "Service temporarily unavailable",
}

# Short error category per domain exception family
ERROR_CATEGORIES: list[tuple[type[EmployeeAPIError], int, str]] = [
    (ResourceNotFoundError, status.HTTP_404_NOT_FOUND, "Resource not found"),
    (DuplicateResourceError, status.HTTP_409_CONFLICT, "Duplicate resource"),
    (ValidationError, status.HTTP_400_BAD_REQUEST, "Invalid argument"),
]

MAX_REPORTED_VALIDATION_ERRORS = 10


def _get_cors_headers(request: Request) -> dict[str, str]:
    """Get CORS headers for error responses.

    Exception handlers for unhandled errors run outside the CORS
    middleware, so allowed origins are echoed here.

    Args:
        request: The incoming request

    Returns:
        Dict of CORS headers to add to the response
    """
    origin = request.headers.get("origin")
    if not origin:
        return {}

    if origin in get_settings().cors_origins_list:
        return {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Credentials": "true",
        }

    return {}


def _envelope(
    request: Request,
    status_code: int,
    message: str,
    error: str | None,
    data: Any = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ApiResponse[Any].fail(message=message, error=error, data=data)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True),
        headers={**_get_cors_headers(request), **(headers or {})},
    )


def classify_error(exc: EmployeeAPIError) -> tuple[int, str]:
    """Return (HTTP status, error category) for a domain exception."""
    for exc_type, status_code, category in ERROR_CATEGORIES:
        if isinstance(exc, exc_type):
            return status_code, category
    return status.HTTP_400_BAD_REQUEST, SAFE_ERROR_MESSAGES[400]


def collect_field_errors(errors: list[dict[str, Any]]) -> dict[str, str]:
    """Flatten pydantic error dicts into {field: message}.

    Args:
        errors: Output of RequestValidationError.errors()

    Returns:
        Mapping of field name to the first message reported for it
    """
    field_errors: dict[str, str] = {}
    for error in errors:
        loc = error.get("loc", ())
        field = str(loc[-1]) if loc else "request"
        if field.startswith("_") or field in field_errors:
            continue
        field_errors[field] = error.get("msg", "Invalid value")
        if len(field_errors) >= MAX_REPORTED_VALIDATION_ERRORS:
            break
    return field_errors


async def employee_api_exception_handler(request: Request, exc: EmployeeAPIError) -> JSONResponse:
    """Handle domain exceptions raised by services.

    Args:
        request: FastAPI request
        exc: Domain exception

    Returns:
        JSONResponse with the domain message
    """
    status_code, category = classify_error(exc)
    log_warning(logger, f"{category} for {request.method} {request.url.path}", exc)
    return _envelope(request, status_code, exc.message, category)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation failures as 400 with per-field messages.

    Args:
        request: FastAPI request
        exc: Validation exception

    Returns:
        JSONResponse listing offending fields
    """
    field_errors = collect_field_errors(exc.errors())
    logger.warning(f"Validation error for {request.method} {request.url.path}: {sorted(field_errors)}")
    return _envelope(
        request,
        status.HTTP_400_BAD_REQUEST,
        "Validation failed",
        "Invalid input data",
        data=field_errors,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions (unknown routes, wrong methods) with safe messages.

    Args:
        request: FastAPI request
        exc: HTTP exception

    Returns:
        JSONResponse with sanitized error
    """
    message = SAFE_ERROR_MESSAGES.get(exc.status_code, "Request failed")
    if get_settings().debug and isinstance(exc.detail, str):
        message = exc.detail
    return _envelope(
        request,
        exc.status_code,
        message,
        SAFE_ERROR_MESSAGES.get(exc.status_code),
        headers=getattr(exc, "headers", None),
    )


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle rate limit violations, including a Retry-After header."""
    logger.warning(f"Rate limit exceeded for {request.method} {request.url.path}")
    return _envelope(
        request,
        status.HTTP_429_TOO_MANY_REQUESTS,
        "Rate limit exceeded",
        SAFE_ERROR_MESSAGES[429],
        headers={"Retry-After": "60"},
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle SQLAlchemy exceptions without leaking database details.

    Args:
        request: FastAPI request
        exc: SQLAlchemy exception

    Returns:
        JSONResponse with safe error
    """
    if isinstance(exc, IntegrityError):
        text = str(exc.orig if exc.orig is not None else exc).lower()
        if "unique" in text or "duplicate" in text:
            log_warning(logger, f"Integrity conflict for {request.method} {request.url.path}", exc)
            return _envelope(
                request,
                status.HTTP_409_CONFLICT,
                "Resource already exists",
                "Duplicate resource",
            )
        if "foreign key" in text:
            log_warning(logger, f"Foreign key violation for {request.method} {request.url.path}", exc)
            return _envelope(
                request,
                status.HTTP_400_BAD_REQUEST,
                "Referenced resource not found",
                "Invalid argument",
            )

    log_error(logger, f"Database error for {request.method} {request.url.path}", exc)
    message = f"Database error: {type(exc).__name__}" if get_settings().debug else "Database error occurred"
    return _envelope(request, status.HTTP_500_INTERNAL_SERVER_ERROR, message, SAFE_ERROR_MESSAGES[500])


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without leaking information.

    Args:
        request: FastAPI request
        exc: Unexpected exception

    Returns:
        JSONResponse with generic error
    """
    log_error(logger, f"Unhandled exception for {request.method} {request.url.path}", exc)
    message = str(exc) if get_settings().debug else "An unexpected error occurred"
    return _envelope(request, status.HTTP_500_INTERNAL_SERVER_ERROR, message, SAFE_ERROR_MESSAGES[500])
