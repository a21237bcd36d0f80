"""
Book Schemas for the library catalog

Pydantic models for the two transient projections of a book:
- BookRequest: create/update payloads, no identity or timestamps
- BookResponse: what callers get back, never the soft-delete marker

Design Decisions:
1. Strict validation: required fields must be present and non-blank
2. Separate Request/Response: identity is never accepted from a client
3. Unknown keys in requests are ignored, so a client-sent id is dropped
4. Limits mirror the books table: string lengths match the column sizes
   and copies fits a 32-bit INTEGER, so oversized input is a 400 rather
   than a storage failure
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Column sizes of the books table
TITLE_MAX = 500
AUTHOR_MAX = 500
ISBN_MAX = 32
PUBLISHER_MAX = 200
COPIES_MAX = 2**31 - 1


class BookRequest(BaseModel):
    """Book create/update request."""

    title: str = Field(..., min_length=1, max_length=TITLE_MAX)
    author: str = Field(..., min_length=1, max_length=AUTHOR_MAX)
    isbn: str = Field(..., min_length=1, max_length=ISBN_MAX)
    publisher: str = Field(..., min_length=1, max_length=PUBLISHER_MAX)
    publish_date: date
    description: str = ""
    # strict: JSON true/false is not a count
    copies: int = Field(..., ge=0, le=COPIES_MAX, strict=True)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Dune",
                "author": "Frank Herbert",
                "isbn": "9780441172719",
                "publisher": "Chilton Books",
                "publish_date": "1965-08-01",
                "description": "A desert planet, a noble family and a spice.",
                "copies": 3,
            }
        }
    )

    @field_validator("title", "author", "isbn", "publisher")
    @classmethod
    def not_blank(cls, value: str) -> str:
        """Reject whitespace-only values."""
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("description", mode="before")
    @classmethod
    def description_or_empty(cls, value):
        return "" if value is None else value


class BookResponse(BaseModel):
    """Book response model."""

    id: UUID
    title: str
    author: str
    isbn: str
    publisher: str
    publish_date: date
    description: str
    copies: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
