"""
API middleware components.

Provides cross-cutting concerns for the API:
- Error handling
- CORS configuration
- Request/response logging
"""

from .error_handler import (
    STATUS_BY_KIND,
    classify_request_error,
    create_error_response,
    setup_exception_handlers,
    status_for,
)

from .cors import (
    CORSConfig,
    get_cors_config,
    setup_cors,
)

from .logging import (
    LoggingConfig,
    StructuredLogFormatter,
    RequestLoggingMiddleware,
    setup_logging,
    get_request_id,
)


__all__ = [
    # Error handling
    "STATUS_BY_KIND",
    "classify_request_error",
    "create_error_response",
    "setup_exception_handlers",
    "status_for",
    # CORS
    "CORSConfig",
    "get_cors_config",
    "setup_cors",
    # Logging
    "LoggingConfig",
    "StructuredLogFormatter",
    "RequestLoggingMiddleware",
    "setup_logging",
    "get_request_id",
]
