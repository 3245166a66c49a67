"""
Book Pydantic Schemas

Request and response shapes for /api/books.

The JSON side uses camelCase (yearPublished, listType, dateAdded) via field
aliases; Python code uses the snake_case field names. populate_by_name lets
handlers build responses from either form.

Validation happens here, before any database call. Fields are declared in
the order their errors should be reported: the exception handler in
main.py reports only the first error, so a missing title wins over a bad
listType, which wins over a bad rating.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from bookshelf.models import ListType


class BookBase(BaseModel):
    """
    Mutable book fields shared by the create and update schemas.

    Strings are stored exactly as sent. A whitespace-only title or author
    still counts as missing.
    Optional fields distinguish "absent" (None) from zero-like values:
    yearPublished 0 and notes "" are stored as given.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Book title",
        examples=["Dune"],
    )

    author: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Book author",
        examples=["Frank Herbert"],
    )

    list_type: ListType = Field(
        ...,
        alias="listType",
        description="'owned' for books on the shelf, 'want' for the wish list",
        examples=["owned"],
    )

    genre: str | None = Field(
        default=None,
        max_length=100,
        description="Free-form genre",
        examples=["Science Fiction"],
    )

    year_published: int | None = Field(
        default=None,
        alias="yearPublished",
        description="Year of first publication",
        examples=[1965],
    )

    rating: int | None = Field(
        default=None,
        ge=1,  # ge = greater than or equal
        le=5,  # le = less than or equal
        description="Personal rating from 1 to 5",
        examples=[5],
    )

    notes: str | None = Field(
        default=None,
        description="Personal notes",
        examples=["Read it twice."],
    )

    @field_validator("title", "author")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        """Whitespace-only counts as missing; anything else is kept verbatim."""
        if not v.strip():
            raise PydanticCustomError("blank_string", "Field must not be blank")
        return v

    @field_validator("year_published", "rating", mode="before")
    @classmethod
    def reject_booleans(cls, v):
        """JSON true/false would otherwise be coerced to 1/0."""
        if isinstance(v, bool):
            raise PydanticCustomError("int_type", "Input should be a valid integer")
        return v


class BookCreate(BookBase):
    """
    Schema for creating a new book.

    id and dateAdded are generated by the server; if a client sends them
    they are ignored.

    Example request body:
    {
        "title": "Dune",
        "author": "Frank Herbert",
        "listType": "owned",
        "rating": 5
    }
    """


class BookUpdate(BookBase):
    """
    Schema for replacing a book's mutable fields.

    PUT is a full replace, not a patch: the required fields must be sent
    again and any optional field left out is cleared to null.
    """


class BookResponse(BaseModel):
    """
    Schema for book responses.

    Serialized with aliases, so clients see yearPublished, listType and
    dateAdded. No input constraints here: rows written by other tools
    (a rating of 7, an overlong title) are still returned as stored.
    """

    id: str = Field(..., description="Unique identifier (UUID)")
    title: str
    author: str
    list_type: ListType = Field(..., alias="listType")
    genre: str | None = None
    year_published: int | None = Field(default=None, alias="yearPublished")
    rating: int | None = None
    notes: str | None = None
    date_added: datetime = Field(
        ...,
        alias="dateAdded",
        description="When the book was added (UTC)",
    )

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "0b7f4a9e-6c1d-4d0e-9a53-2f1c8e6b7d11",
                "title": "Dune",
                "author": "Frank Herbert",
                "genre": "Science Fiction",
                "yearPublished": 1965,
                "rating": 5,
                "notes": None,
                "listType": "owned",
                "dateAdded": "2024-01-15T10:30:00.123456Z",
            }
        },
    )

    @field_validator("date_added")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Timestamps are stored as naive UTC; mark them as UTC on the way out."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v
