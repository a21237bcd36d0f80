"""
Book Service

Business rules between the HTTP handlers and storage: builds entities from
request payloads, checks existence before mutating, and projects entities
into response shapes.
"""

import uuid
from dataclasses import replace
from typing import Protocol, runtime_checkable

from loguru import logger

from libcatalog.schemas import BookRequest, BookResponse
from libcatalog.storage.base import Book, BookStore


@runtime_checkable
class CatalogService(Protocol):
    """Catalog operations the request handlers depend on."""

    async def create_book(self, request: BookRequest) -> BookResponse: ...

    async def get_book_by_id(self, book_id: uuid.UUID) -> BookResponse: ...

    async def get_all_books(self) -> list[BookResponse]: ...

    async def update_book(self, book_id: uuid.UUID, request: BookRequest) -> None: ...

    async def delete_book(self, book_id: uuid.UUID) -> None: ...


def to_response(book: Book) -> BookResponse:
    """Project an entity to the public response shape."""
    return BookResponse.model_validate(book, from_attributes=True)


class BookService:
    """Service for managing the book catalog."""

    def __init__(self, store: BookStore):
        """
        Initialize service.

        Args:
            store: Storage for books
        """
        self.store = store

    async def create_book(self, request: BookRequest) -> BookResponse:
        """
        Add a new book to the catalog.

        The store assigns the id and timestamps.

        Args:
            request: Validated book payload

        Returns:
            The stored book
        """
        book = Book(
            title=request.title,
            author=request.author,
            isbn=request.isbn,
            publisher=request.publisher,
            publish_date=request.publish_date,
            description=request.description,
            copies=request.copies,
        )
        created = await self.store.create(book)
        return to_response(created)

    async def get_book_by_id(self, book_id: uuid.UUID) -> BookResponse:
        """Get a book by its id. Raises NotFoundError when absent."""
        book = await self.store.get_by_id(book_id)
        return to_response(book)

    async def get_all_books(self) -> list[BookResponse]:
        books = await self.store.get_all()
        return [to_response(book) for book in books]

    async def update_book(self, book_id: uuid.UUID, request: BookRequest) -> None:
        """
        Replace a book's contents with the request.

        Every mutable field is overwritten, including fields the request
        leaves at their defaults. The id and creation time are kept.

        Args:
            book_id: Book to update
            request: Validated book payload

        Raises:
            NotFoundError: The book does not exist
        """
        existing = await self.store.get_by_id(book_id)

        updated = replace(
            existing,
            title=request.title,
            author=request.author,
            isbn=request.isbn,
            publisher=request.publisher,
            publish_date=request.publish_date,
            description=request.description,
            copies=request.copies,
        )
        await self.store.update(updated)
        logger.debug(f"Book {book_id} replaced")

    async def delete_book(self, book_id: uuid.UUID) -> None:
        """Remove a book. Raises NotFoundError when absent."""
        await self.store.delete(book_id)
