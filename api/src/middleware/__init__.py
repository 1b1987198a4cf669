"""FastAPI middleware components.

This package contains the cross-origin policy and request logging
middleware.
"""

from api.src.middleware.cors import add_cors_middleware, cors_options, origin_patterns_to_regex
from api.src.middleware.request_logging import CORRELATION_ID_HEADER, RequestLoggingMiddleware

__all__ = [
    "CORRELATION_ID_HEADER",
    "RequestLoggingMiddleware",
    "add_cors_middleware",
    "cors_options",
    "origin_patterns_to_regex",
]
