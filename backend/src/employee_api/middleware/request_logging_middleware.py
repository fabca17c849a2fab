"""Request logging middleware."""

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from employee_api.utils.request_id import REQUEST_ID_HEADER, resolve_request_id

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tags every request with a request ID and logs its outcome.

    Requests from origins outside the CORS allow-list are logged as
    warnings so misconfigured clients show up in the logs.
    """

    # Paths excluded from per-request logging
    EXCLUDED_PATHS = {
        "/health",
        "/api/v1/employees/health",
        "/docs",
        "/redoc",
        "/openapi.json",
    }

    def __init__(self, app, allowed_origins: list[str] | None = None) -> None:
        """Initialize the middleware.

        Args:
            app: The ASGI application
            allowed_origins: Allowed CORS origins
        """
        super().__init__(app)
        self.allowed_origins = frozenset(allowed_origins or [])

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Response],
    ) -> Response:
        """Process the request and log method, path, status and duration.

        Args:
            request: Incoming request
            call_next: Next middleware/handler

        Returns:
            Response from downstream handler, with the request ID header set
        """
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id

        origin = request.headers.get("origin")
        if origin and origin not in self.allowed_origins:
            logger.warning(
                f"CORS origin rejected: {origin} {request.method} {request.url.path} "
                f"request_id={request_id}"
            )

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        response.headers[REQUEST_ID_HEADER] = request_id

        if request.url.path not in self.EXCLUDED_PATHS:
            message = (
                f"{request.method} {request.url.path} "
                f"status={response.status_code} duration_ms={duration_ms:.1f} "
                f"request_id={request_id}"
            )
            if response.status_code < 400:
                logger.info(message)
            else:
                logger.warning(message)

        return response
