"""
Book Repository for the library catalog

Relational storage for books using SQLAlchemy's asyncio ORM:
- PostgreSQL (asyncpg) for production
- SQLite (aiosqlite) for development/testing

Design Decisions:
1. One repository per transaction: the session is injected, never created here
2. Errors are classified here: NotFoundError for missing rows, StorageError
   for everything the database rejects
3. Writes are single statements keyed by id; zero affected rows means not found
4. Hard deletes: deleted_at is reserved in the schema but never written
"""

import uuid
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import datetime
from typing import AsyncIterator, Callable

from loguru import logger
from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from libcatalog.errors import NotFoundError, StorageError
from libcatalog.storage.base import Book, utcnow
from libcatalog.storage.models import BookModel


def to_entity(model: BookModel) -> Book:
    """Map a database row to a Book entity."""
    return Book(
        id=uuid.UUID(model.id),
        title=model.title,
        author=model.author,
        isbn=model.isbn,
        publisher=model.publisher,
        publish_date=model.publish_date,
        description=model.description or "",
        copies=model.copies,
        created_at=model.created_at,
        updated_at=model.updated_at,
        deleted_at=model.deleted_at,
    )


def to_model(book: Book) -> BookModel:
    """Map a Book entity (with id and timestamps set) to a database row."""
    return BookModel(
        id=str(book.id),
        title=book.title,
        author=book.author,
        isbn=book.isbn,
        publisher=book.publisher,
        publish_date=book.publish_date,
        description=book.description,
        copies=book.copies,
        created_at=book.created_at,
        updated_at=book.updated_at,
        deleted_at=book.deleted_at,
    )


class BookRepository:
    """
    Repository for book CRUD operations.

    Usage:
        async with session_factory() as session:
            repo = BookRepository(session)
            book = await repo.create(Book(title="Dune", ...))
            same = await repo.get_by_id(book.id)
    """

    def __init__(
        self,
        session: AsyncSession,
        clock: Callable[[], datetime] = utcnow,
    ):
        """
        Initialize repository.

        Args:
            session: Live database session (transaction context)
            clock: Source of timestamps
        """
        self.session = session
        self.clock = clock

    @asynccontextmanager
    async def _translate_errors(self, operation: str) -> AsyncIterator[None]:
        """Roll back and re-raise database failures as StorageError."""
        try:
            yield
        except IntegrityError as e:
            await self.session.rollback()
            logger.error(f"Constraint violation during {operation}: {e.orig}")
            raise StorageError(
                f"could not {operation}: constraint violation",
                detail=str(e.orig),
            ) from e
        except (SQLAlchemyError, OverflowError) as e:
            # OverflowError comes straight from sqlite3 when binding an int
            # wider than 64 bits; SQLAlchemy does not wrap it
            await self.session.rollback()
            logger.error(f"Database error during {operation}: {e}")
            raise StorageError(f"could not {operation}: {e}") from e

    async def create(self, book: Book) -> Book:
        """
        Insert a new book.

        Any id or timestamps on the input are discarded; a fresh UUID and
        identical created/updated timestamps are assigned.

        Args:
            book: Book to insert

        Returns:
            The stored Book
        """
        now = self.clock()
        stored = replace(
            book,
            id=uuid.uuid4(),
            created_at=now,
            updated_at=now,
            deleted_at=None,
        )

        async with self._translate_errors("create book"):
            self.session.add(to_model(stored))
            await self.session.commit()

        logger.info(f"Created book {stored.id} (isbn={stored.isbn})")
        return stored

    async def get_by_id(self, book_id: uuid.UUID) -> Book:
        """
        Get book by ID.

        Raises:
            NotFoundError: No row has this id
        """
        async with self._translate_errors("get book"):
            result = await self.session.execute(
                select(BookModel)
                .where(BookModel.id == str(book_id))
                .execution_options(populate_existing=True)
            )
            model = result.scalar_one_or_none()

        if model is None:
            raise NotFoundError("book", str(book_id))
        return to_entity(model)

    async def get_all(self) -> list[Book]:
        """List every book in the order the database returns them."""
        async with self._translate_errors("list books"):
            result = await self.session.execute(
                select(BookModel).execution_options(populate_existing=True)
            )
            models = result.scalars().all()

        return [to_entity(m) for m in models]

    async def update(self, book: Book) -> Book:
        """
        Replace every mutable column of an existing book.

        The id and created_at are left untouched; updated_at is refreshed.

        Raises:
            NotFoundError: No row has this id
        """
        now = self.clock()
        stmt = (
            update(BookModel)
            .where(BookModel.id == str(book.id))
            .values(
                title=book.title,
                author=book.author,
                isbn=book.isbn,
                publisher=book.publisher,
                publish_date=book.publish_date,
                description=book.description,
                copies=book.copies,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )

        async with self._translate_errors("update book"):
            result = await self.session.execute(stmt)
            if result.rowcount == 0:
                await self.session.rollback()
                raise NotFoundError("book", str(book.id))
            await self.session.commit()

        logger.info(f"Updated book {book.id}")
        return replace(book, updated_at=now)

    async def delete(self, book_id: uuid.UUID) -> None:
        """
        Physically remove a book.

        Raises:
            NotFoundError: No row has this id
        """
        stmt = (
            delete(BookModel)
            .where(BookModel.id == str(book_id))
            .execution_options(synchronize_session=False)
        )

        async with self._translate_errors("delete book"):
            result = await self.session.execute(stmt)
            if result.rowcount == 0:
                await self.session.rollback()
                raise NotFoundError("book", str(book_id))
            await self.session.commit()

        logger.info(f"Deleted book {book_id}")
