"""
SQLAlchemy Models Package

Import models here so they are registered on Base.metadata and
available as: from bookshelf.models import Book, ListType
"""

from bookshelf.models.book import Book, ListType, utcnow

__all__ = [
    "Book",
    "ListType",
    "utcnow",
]
