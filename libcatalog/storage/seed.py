"""
Reference catalog data loaded on first startup.
"""

import uuid
from datetime import date, datetime
from typing import Callable

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from libcatalog.errors import StorageError
from libcatalog.storage.base import Book, utcnow
from libcatalog.storage.book_repository import to_model
from libcatalog.storage.models import BookModel


SEED_BOOKS = [
    {
        "title": "To Kill a Mockingbird",
        "author": "Harper Lee",
        "isbn": "9780061120084",
        "publisher": "HarperCollins",
        "publish_date": date(1960, 7, 11),
        "description": "The unforgettable novel of a childhood in a sleepy Southern town and the crisis of conscience that rocked it.",
        "copies": 10,
    },
    {
        "title": "1984",
        "author": "George Orwell",
        "isbn": "9780451524935",
        "publisher": "Signet Classic",
        "publish_date": date(1949, 6, 8),
        "description": "A dystopian novel set in Airstrip One, a province of the superstate Oceania in a world of perpetual war.",
        "copies": 7,
    },
    {
        "title": "The Great Gatsby",
        "author": "F. Scott Fitzgerald",
        "isbn": "9780743273565",
        "publisher": "Scribner",
        "publish_date": date(1925, 4, 10),
        "description": "A portrait of the Jazz Age in all of its decadence and excess.",
        "copies": 5,
    },
    {
        "title": "Pride and Prejudice",
        "author": "Jane Austen",
        "isbn": "9780141439518",
        "publisher": "Penguin Classics",
        "publish_date": date(1813, 1, 28),
        "description": "A romantic novel of manners that follows the character development of Elizabeth Bennet.",
        "copies": 8,
    },
    {
        "title": "The Hobbit",
        "author": "J.R.R. Tolkien",
        "isbn": "9780547928227",
        "publisher": "Houghton Mifflin Harcourt",
        "publish_date": date(1937, 9, 21),
        "description": "A fantasy novel about the adventures of hobbit Bilbo Baggins.",
        "copies": 12,
    },
]


async def seed_books(
    session: AsyncSession,
    clock: Callable[[], datetime] = utcnow,
) -> int:
    """
    Insert the reference books if the catalog is empty.

    Safe to run on every startup: when any book already exists nothing is
    written.

    Args:
        session: Database session
        clock: Source of timestamps

    Returns:
        Number of books inserted (0 when skipped)

    Raises:
        StorageError: Counting or inserting failed; nothing is committed
    """
    try:
        count = await session.scalar(select(func.count()).select_from(BookModel))
        if count:
            logger.info(f"Books table already has {count} rows, skipping seed")
            return 0

        now = clock()
        books = [
            Book(id=uuid.uuid4(), created_at=now, updated_at=now, **entry)
            for entry in SEED_BOOKS
        ]
        session.add_all([to_model(book) for book in books])
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Seeding books failed: {e}")
        raise StorageError(f"error seeding books: {e}") from e

    logger.info(f"Seeded {len(books)} books successfully")
    return len(books)
