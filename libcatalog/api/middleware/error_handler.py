"""
Error Handling for the library catalog API

Centralized error handling:
- Structured error responses
- Logging of errors
- Translation of error kinds into HTTP status codes
"""

import traceback
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from libcatalog.errors import CatalogError, ErrorKind
from .logging import get_request_id


# The only place an error kind becomes a transport status.
STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_IDENTIFIER: status.HTTP_400_BAD_REQUEST,
    ErrorKind.STORAGE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(kind: ErrorKind) -> int:
    """HTTP status for an error kind."""
    return STATUS_BY_KIND.get(kind, status.HTTP_500_INTERNAL_SERVER_ERROR)


def create_error_response(
    error: str,
    code: str,
    status_code: int,
    detail: Optional[str] = None,
) -> JSONResponse:
    """Create standardized error response."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "code": code,
            "detail": detail,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


def format_validation_errors(errors: Sequence[dict[str, Any]]) -> str:
    """Render pydantic errors as 'field: message' pairs."""
    parts = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "path", "query")]
        field = ".".join(loc) or "body"
        parts.append(f"{field}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)


def classify_request_error(exc: RequestValidationError) -> tuple[ErrorKind, str, str]:
    """
    Split FastAPI's request validation failures into the catalog's kinds.

    A malformed path id wins over body errors. A body that is not JSON at
    all is rejected by FastAPI before the path is validated, so a PUT with
    both a bad id and a broken body reports "Invalid request body"; both
    outcomes are 400.

    Returns:
        (kind, message, detail)
    """
    errors = exc.errors()

    if any(err.get("loc", ())[:1] == ("path",) for err in errors):
        path_errors = [e for e in errors if e.get("loc", ())[:1] == ("path",)]
        return (
            ErrorKind.INVALID_IDENTIFIER,
            "Invalid book ID",
            format_validation_errors(path_errors),
        )

    if any(err.get("type") == "json_invalid" for err in errors):
        return ErrorKind.VALIDATION, "Invalid request body", "Body is not valid JSON"

    return ErrorKind.VALIDATION, "Validation failed", format_validation_errors(errors)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with FastAPI app."""

    @app.exception_handler(CatalogError)
    async def catalog_exception_handler(request: Request, exc: CatalogError):
        status_code = status_for(exc.kind)
        if status_code >= 500:
            logger.error(f"[{get_request_id()}] Catalog error on {request.url.path}: {exc.kind.value} - {exc.message}")
        else:
            logger.warning(f"[{get_request_id()}] Catalog error on {request.url.path}: {exc.kind.value} - {exc.message}")
        return create_error_response(
            error=exc.message,
            code=exc.kind.value,
            status_code=status_code,
            detail=exc.detail,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        kind, message, detail = classify_request_error(exc)
        logger.warning(f"[{get_request_id()}] Rejected request to {request.url.path}: {message} ({detail})")
        return create_error_response(
            error=message,
            code=kind.value,
            status_code=status_for(kind),
            detail=detail,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"[{get_request_id()}] Unhandled exception: {type(exc).__name__}: {str(exc)}\n{traceback.format_exc()}"
        )
        return create_error_response(
            error="Internal Server Error",
            code="INTERNAL_ERROR",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred",
        )
