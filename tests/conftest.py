"""
pytest Fixtures for Bookshelf API Tests

This file contains shared fixtures used across all test files.

DATABASE STRATEGY
=================
Each test gets its own SQLite database file (pytest's tmp_path):
- The app talks to it through the async aiosqlite driver, exactly the
  way it talks to MySQL in production (engine + pool built in the
  lifespan, table created by the schema initializer).
- Tests that need rows with specific timestamps write them through a
  plain synchronous SQLAlchemy session on the same file.

A file (not :memory:) is used so both engines see the same data.
"""

from collections.abc import Generator
from datetime import datetime
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from bookshelf.config import Settings
from bookshelf.main import create_app
from bookshelf.models import Book, ListType


# =============================================================================
# APPLICATION FIXTURES
# =============================================================================
@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Location of this test's SQLite database file."""
    return tmp_path / "bookshelf.db"


@pytest.fixture
def test_settings(db_path: Path) -> Settings:
    """Settings pointing at the per-test SQLite database."""
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{db_path}",
        db_pool_size=5,
        db_pool_timeout=5,
        init_db_on_startup=True,
    )


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    """A fresh application instance bound to the test settings."""
    return create_app(test_settings)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """
    Test client with the lifespan running.

    Entering the context runs startup (SELECT 1 check + table creation);
    leaving it disposes of the engine.
    """
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def db_session(client: TestClient, db_path: Path) -> Generator[Session, None, None]:
    """
    Synchronous session on the test database.

    Depends on client so the books table already exists.
    """
    engine = create_engine(f"sqlite:///{db_path}")
    with Session(engine) as session:
        yield session
    engine.dispose()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
@pytest.fixture
def sample_book(client: TestClient) -> dict:
    """Create a book through the API and return its JSON."""
    response = client.post(
        "/api/books",
        json={
            "title": "Dune",
            "author": "Frank Herbert",
            "genre": "Science Fiction",
            "yearPublished": 1965,
            "rating": 5,
            "notes": "Spice must flow.",
            "listType": "owned",
        },
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def make_book(db_session: Session):
    """
    Factory inserting a book row directly, with an explicit dateAdded.

    Usage:
        make_book("b1", datetime(2024, 1, 1))
    """

    def _make_book(book_id: str, date_added: datetime, **fields) -> Book:
        values = {
            "title": f"Book {book_id}",
            "author": "Test Author",
            "list_type": ListType.WANT,
        }
        values.update(fields)
        book = Book(id=book_id, date_added=date_added, **values)
        db_session.add(book)
        db_session.commit()
        return book

    return _make_book

