"""
Book Model

The only table of the Bookshelf API.

Column names are camelCase (yearPublished, listType, dateAdded) so the table
matches the JSON the API speaks and existing databases created with that
layout. The Python attributes use snake_case; mapped_column's first
argument carries the column name.
"""

import enum
from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, Integer, String, Text
from sqlalchemy.dialects import mysql
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql.expression import FunctionElement

from bookshelf.database import Base


class ListType(str, enum.Enum):
    """Which list a book belongs to."""

    OWNED = "owned"
    WANT = "want"


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the way dateAdded is stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# MySQL DATETIME drops fractional seconds unless asked for them; keep
# microseconds so books added within the same second still sort correctly.
TimestampType = DateTime().with_variant(mysql.DATETIME(fsp=6), "mysql")


class current_timestamp_default(FunctionElement):
    """
    Server default for dateAdded.

    MySQL requires the default of a DATETIME(6) column to carry the same
    precision (error 1067 otherwise), so it renders CURRENT_TIMESTAMP(6)
    there and plain CURRENT_TIMESTAMP everywhere else.
    """

    type = DateTime()
    name = "current_timestamp_default"
    inherit_cache = True


@compiles(current_timestamp_default)
def _compile_current_timestamp(element, compiler, **kw):
    return "CURRENT_TIMESTAMP"


@compiles(current_timestamp_default, "mysql")
def _compile_current_timestamp_mysql(element, compiler, **kw):
    return "CURRENT_TIMESTAMP(6)"


class Book(Base):
    """
    A book the user owns or wants.

    Table: books

    Fields:
    - id: UUID string, generated by the API on create
    - title, author: required
    - genre, year_published, rating, notes: optional
    - list_type: "owned" or "want"
    - date_added: creation time (UTC), never updated

    Example:
        book = Book(
            id=str(uuid.uuid4()),
            title="Dune",
            author="Frank Herbert",
            list_type=ListType.OWNED,
        )
    """

    __tablename__ = "books"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False)
    genre: Mapped[str | None] = mapped_column(String(100), nullable=True)
    year_published: Mapped[int | None] = mapped_column(
        "yearPublished",
        Integer,
        nullable=True,
    )
    rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # ENUM('owned', 'want') on MySQL; VARCHAR + CHECK elsewhere
    list_type: Mapped[ListType] = mapped_column(
        "listType",
        Enum(
            ListType,
            name="list_type",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
            create_constraint=True,
            validate_strings=True,
        ),
        nullable=False,
    )

    date_added: Mapped[datetime] = mapped_column(
        "dateAdded",
        TimestampType,
        server_default=current_timestamp_default(),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"Book(id='{self.id}', title='{self.title}', list_type='{self.list_type}')"
