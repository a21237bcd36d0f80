"""
Service layer for the library catalog.
"""

from libcatalog.services.book_service import (
    BookService,
    CatalogService,
    to_response,
)

__all__ = [
    "BookService",
    "CatalogService",
    "to_response",
]
