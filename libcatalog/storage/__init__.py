"""
Storage Module for the library catalog

Persistent storage for books:
- Book entity and the BookStore protocol
- SQLAlchemy models
- Async repository implementation
- Startup seeding of reference data
"""

from libcatalog.storage.base import (
    Book,
    BookStore,
    utcnow,
)
from libcatalog.storage.models import (
    Base,
    BookModel,
)
from libcatalog.storage.book_repository import BookRepository
from libcatalog.storage.seed import (
    SEED_BOOKS,
    seed_books,
)

__all__ = [
    # Entity
    "Book",
    "BookStore",
    "utcnow",
    # Models
    "Base",
    "BookModel",
    # Repository
    "BookRepository",
    # Seeding
    "SEED_BOOKS",
    "seed_books",
]
