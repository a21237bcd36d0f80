"""
API Routes for the library catalog

Route modules:
- books: Book CRUD
"""

from libcatalog.api.routes.books import router as books_router

__all__ = [
    "books_router",
]
