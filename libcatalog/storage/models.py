"""
Database models for the library catalog.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class BookModel(Base):
    """SQLAlchemy model for books."""

    __tablename__ = "books"

    id = Column(String(36), primary_key=True)  # UUID

    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)
    # Reserved for soft deletes; nothing writes it.
    deleted_at = Column(DateTime)

    title = Column(String(500), nullable=False)
    author = Column(String(500), nullable=False)
    isbn = Column(String(32), nullable=False, unique=True, index=True)
    publisher = Column(String(200), nullable=False)
    publish_date = Column(Date, nullable=False)
    description = Column(Text)
    copies = Column(Integer, nullable=False, default=1, server_default="1")

    __table_args__ = (
        CheckConstraint("copies >= 0", name="ck_books_copies_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<BookModel id={self.id} isbn={self.isbn}>"
