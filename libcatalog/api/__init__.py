"""
Library Catalog - FastAPI Backend.

HTTP surface for the book catalog.
"""

from .main import app, create_app, main
from .dependencies import (
    Settings,
    get_settings,
    get_db,
    get_book_repository,
    get_book_service,
)
from .schemas import (
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    # Application
    "app",
    "create_app",
    "main",
    # Dependencies
    "Settings",
    "get_settings",
    "get_db",
    "get_book_repository",
    "get_book_service",
    # Schemas
    "ErrorResponse",
    "HealthResponse",
]
