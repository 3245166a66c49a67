#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample books for development.

USAGE:
    # Make sure you're in the project root with venv activated
    python scripts/seed_data.py

    # Start from an empty table
    python scripts/seed_data.py --clear

This script:
1. Connects to the database using app settings
2. Creates the books table if needed
3. Optionally clears existing books
4. Inserts a few owned and wanted books
"""

import argparse
import asyncio
import sys
import uuid
from datetime import timedelta
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.config import get_settings
from bookshelf.database import create_db_engine, create_session_factory, init_schema
from bookshelf.models import Book, ListType, utcnow

SAMPLE_BOOKS = [
    {
        "title": "Dune",
        "author": "Frank Herbert",
        "genre": "Science Fiction",
        "year_published": 1965,
        "rating": 5,
        "notes": "Reread every few years.",
        "list_type": ListType.OWNED,
    },
    {
        "title": "The Left Hand of Darkness",
        "author": "Ursula K. Le Guin",
        "genre": "Science Fiction",
        "year_published": 1969,
        "rating": 4,
        "list_type": ListType.OWNED,
    },
    {
        "title": "Pride and Prejudice",
        "author": "Jane Austen",
        "genre": "Classic",
        "year_published": 1813,
        "list_type": ListType.OWNED,
    },
    {
        "title": "The Name of the Rose",
        "author": "Umberto Eco",
        "genre": "Mystery",
        "year_published": 1980,
        "notes": "Recommended by a friend.",
        "list_type": ListType.WANT,
    },
    {
        "title": "Piranesi",
        "author": "Susanna Clarke",
        "genre": "Fantasy",
        "year_published": 2020,
        "list_type": ListType.WANT,
    },
]


async def clear_data(db: AsyncSession) -> None:
    """Delete every book."""
    print("Clearing existing books...")
    await db.execute(delete(Book))
    await db.commit()
    print("Data cleared.")


async def create_books(db: AsyncSession) -> list[Book]:
    """Insert the sample books, oldest first so list order is stable."""
    print("Creating books...")
    start = utcnow() - timedelta(minutes=len(SAMPLE_BOOKS))
    books = []
    for offset, data in enumerate(SAMPLE_BOOKS):
        book = Book(
            id=str(uuid.uuid4()),
            date_added=start + timedelta(minutes=offset),
            **data,
        )
        db.add(book)
        books.append(book)
    await db.commit()
    print(f"Created {len(books)} books.")
    return books


async def seed_database(clear: bool) -> None:
    """Main function to seed the database."""
    settings = get_settings()
    engine = create_db_engine(settings)
    session_factory = create_session_factory(engine)

    print("=" * 50)
    print("Bookshelf API - Database Seeder")
    print("=" * 50)

    try:
        await init_schema(engine)
        async with session_factory() as db:
            if clear:
                await clear_data(db)
            books = await create_books(db)

        print("\n" + "=" * 50)
        print("Seeding complete!")
        print("=" * 50)
        print(f"  - Owned: {sum(b.list_type is ListType.OWNED for b in books)}")
        print(f"  - Wanted: {sum(b.list_type is ListType.WANT for b in books)}")
        print(f"\nYou can now access the API at http://localhost:{settings.api_port}/api/books")
    except Exception as e:
        print(f"Error seeding database: {e}")
        raise
    finally:
        await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Insert sample books.")
    parser.add_argument(
        "--clear",
        action="store_true",
        help="delete existing books first",
    )
    args = parser.parse_args()
    asyncio.run(seed_database(clear=args.clear))
