"""
Domain errors for the library catalog.

Every failure raised by the storage, service and API layers is a
``CatalogError`` carrying one of a small, closed set of error kinds.
Callers branch on ``error.kind`` rather than on exception identity, and
only the API layer turns a kind into an HTTP status.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Closed set of failure kinds."""
    NOT_FOUND = "NOT_FOUND"
    STORAGE = "STORAGE_ERROR"
    VALIDATION = "VALIDATION_ERROR"
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"


class CatalogError(Exception):
    """Base exception for catalog errors."""

    kind: ErrorKind = ErrorKind.STORAGE

    def __init__(self, message: str, detail: Optional[str] = None):
        self.message = message
        self.detail = detail
        super().__init__(message)


class NotFoundError(CatalogError):
    """No record matches an identifier-addressed operation."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str = "book", identifier: Optional[str] = None):
        detail = None
        if identifier is not None:
            detail = f"No {resource} with identifier '{identifier}' exists"
        super().__init__(f"{resource} not found", detail=detail)


class StorageError(CatalogError):
    """Constraint violation, connectivity failure or any other store fault."""

    kind = ErrorKind.STORAGE


class ValidationError(CatalogError):
    """Malformed payload or failed structural validation."""

    kind = ErrorKind.VALIDATION


class InvalidIdentifierError(CatalogError):
    """Path segment is not a parseable unique identifier."""

    kind = ErrorKind.INVALID_IDENTIFIER

    def __init__(self, value: str):
        super().__init__("Invalid book ID", detail=f"'{value}' is not a valid UUID")
