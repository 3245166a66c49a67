"""
Books Router

CRUD endpoints for the /api/books collection.

Every handler:
- receives an already validated body (invalid input never reaches here)
- issues one or two statements through the request's session
- lets SQLAlchemy errors propagate to the app-level exception handlers,
  which log them and answer 500 (or 503 when the pool is exhausted)

Statements are Core-style insert/update/delete so the handlers can check
how many rows were affected: zero rows on update/delete means the id does
not exist.
"""

import logging
import uuid

from fastapi import APIRouter, HTTPException, Response, status
from sqlalchemy import delete, insert, select, update

from bookshelf.dependencies import DbSession
from bookshelf.models import Book, utcnow
from bookshelf.schemas import BookBase, BookCreate, BookResponse, BookUpdate

logger = logging.getLogger(__name__)

BOOK_NOT_FOUND = "Book not found"

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        404: {"description": "Book not found"},
        500: {"description": "Database error"},
    },
)


# =============================================================================
# Helper Functions
# =============================================================================
def book_column_values(book_data: BookBase) -> dict:
    """
    Map a validated body onto Book columns.

    Every mutable field is included, so fields the client left out are
    written as NULL. This is what makes PUT a full replace.
    """
    return {
        getattr(Book, field): value
        for field, value in book_data.model_dump().items()
    }


async def fetch_book(db: DbSession, book_id: str) -> Book | None:
    """Return the book with this id, or None."""
    result = await db.execute(select(Book).where(Book.id == book_id))
    return result.scalar_one_or_none()


# =============================================================================
# CRUD Endpoints
# =============================================================================
@router.get(
    "",
    response_model=list[BookResponse],
    summary="List all books",
    description="Get every book, newest first.",
)
async def list_books(db: DbSession) -> list[BookResponse]:
    """List all books ordered by dateAdded, newest first."""
    logger.info("Received request: GET /api/books")
    result = await db.execute(select(Book).order_by(Book.date_added.desc()))
    books = result.scalars().all()
    logger.info(f"Found {len(books)} books.")
    return [BookResponse.model_validate(book) for book in books]


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    summary="Get a book by ID",
)
async def get_book(book_id: str, db: DbSession) -> BookResponse:
    """
    Get a single book by its ID.

    The id is not checked for UUID shape; anything that matches no row
    is simply not found.

    Raises:
        HTTPException: 404 if book not found
    """
    logger.info(f"Received request: GET /api/books/{book_id}")
    book = await fetch_book(db, book_id)
    if book is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=BOOK_NOT_FOUND,
        )
    return BookResponse.model_validate(book)


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new book",
    description="Add a book to the owned list or the wish list.",
)
async def create_book(book_data: BookCreate, db: DbSession) -> BookResponse:
    """
    Create a new book.

    The server generates the id (UUID4) and dateAdded. Exactly one row
    must be inserted; anything else is reported as a server error even
    though the input was valid.

    Raises:
        HTTPException: 500 if the insert affected no rows
    """
    logger.info("Received request: POST /api/books")
    book_id = str(uuid.uuid4())
    date_added = utcnow()

    values = book_column_values(book_data)
    values[Book.id] = book_id
    values[Book.date_added] = date_added

    result = await db.execute(insert(Book).values(values))
    if result.rowcount != 1:
        logger.error(
            f"Insert of book {book_id} affected {result.rowcount} rows"
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error adding book to database",
        )
    await db.commit()

    logger.info(f"Created book {book_id}.")
    return BookResponse(
        id=book_id,
        date_added=date_added,
        **book_data.model_dump(),
    )


@router.put(
    "/{book_id}",
    response_model=BookResponse,
    summary="Replace a book",
    description="Overwrite every mutable field of an existing book.",
)
async def update_book(
    book_id: str,
    book_data: BookUpdate,
    db: DbSession,
) -> BookResponse:
    """
    Update an existing book (full replace).

    id and dateAdded are never touched. After the update the row is read
    back; if it has vanished in between (a concurrent delete) we answer
    500 rather than return stale data.

    Raises:
        HTTPException: 404 if book not found
        HTTPException: 500 if the book disappears before it is re-read
    """
    logger.info(f"Received request: PUT /api/books/{book_id}")
    result = await db.execute(
        update(Book)
        .where(Book.id == book_id)
        .values(book_column_values(book_data))
    )
    if result.rowcount == 0:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=BOOK_NOT_FOUND,
        )
    await db.commit()

    book = await fetch_book(db, book_id)
    if book is None:
        logger.error(f"Book {book_id} missing right after update")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error retrieving updated book",
        )
    return BookResponse.model_validate(book)


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a book",
    description="Permanently delete a book.",
)
async def delete_book(book_id: str, db: DbSession) -> Response:
    """
    Delete a book.

    Returns 204 No Content on success.

    Raises:
        HTTPException: 404 if book not found
    """
    logger.info(f"Received request: DELETE /api/books/{book_id}")
    result = await db.execute(delete(Book).where(Book.id == book_id))
    if result.rowcount == 0:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=BOOK_NOT_FOUND,
        )
    await db.commit()
    logger.info(f"Deleted book {book_id}.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
