"""
Pydantic Schemas Package

Request/response validation models, kept separate from the SQLAlchemy
models so the API shape (camelCase JSON) and the table can evolve
independently.

Schema Naming Convention:
- XxxBase: Shared fields
- XxxCreate: Body accepted when creating a record
- XxxUpdate: Body accepted when replacing a record
- XxxResponse: Fields returned in API responses
"""

from bookshelf.schemas.book import (
    BookBase,
    BookCreate,
    BookResponse,
    BookUpdate,
)

__all__ = [
    "BookBase",
    "BookCreate",
    "BookUpdate",
    "BookResponse",
]
