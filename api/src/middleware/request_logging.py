"""
Request logging middleware.

Logs the start and completion of every request with a correlation ID that is
taken from the X-Correlation-ID header or generated, bound to the structlog
context for the lifetime of the request, and echoed on the response.

Unexpected exceptions from the application are logged here and answered
with the error envelope, so the response still passes back through the
cross-origin policy and carries the correlation ID.
"""

import time
import uuid

import structlog
from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware

from api.src.responses import respond_with_error
from shared.logging import bind_context, unbind_context

logger = structlog.get_logger(__name__)

CORRELATION_ID_HEADER = "X-Correlation-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request logging, correlation IDs and unhandled errors."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get(CORRELATION_ID_HEADER) or str(uuid.uuid4())

        method = request.method
        path = request.url.path
        client_ip = request.client.host if request.client else "unknown"

        bind_context(correlation_id=correlation_id)
        start_time = time.perf_counter()

        try:
            logger.info(
                "request_started",
                method=method,
                path=path,
                client_ip=client_ip
            )

            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    "request_failed",
                    method=method,
                    path=path,
                    error=str(e),
                    duration=f"{time.perf_counter() - start_time:.3f}s",
                    exc_info=True
                )
                response = respond_with_error(
                    status.HTTP_500_INTERNAL_SERVER_ERROR, "internal server error"
                )

            logger.info(
                "request_completed",
                method=method,
                path=path,
                status_code=response.status_code,
                duration=f"{time.perf_counter() - start_time:.3f}s"
            )
        finally:
            unbind_context("correlation_id")

        response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response
