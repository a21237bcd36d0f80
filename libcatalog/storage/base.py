"""
Book entity and the storage capability the service layer depends on.
"""

import uuid
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional, Protocol, runtime_checkable


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (what the DateTime columns hold)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


@dataclass
class Book:
    """Full persisted representation of a book."""

    title: str
    author: str
    isbn: str
    publisher: str
    publish_date: date
    description: str = ""
    copies: int = 1

    # Assigned by the store
    id: Optional[uuid.UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None


@runtime_checkable
class BookStore(Protocol):
    """Storage operations for books.

    Implementations are bound to a single transaction context. Missing rows
    raise ``NotFoundError``; every other failure raises ``StorageError``.
    """

    async def create(self, book: Book) -> Book: ...

    async def get_by_id(self, book_id: uuid.UUID) -> Book: ...

    async def get_all(self) -> list[Book]: ...

    async def update(self, book: Book) -> Book: ...

    async def delete(self, book_id: uuid.UUID) -> None: ...
