"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 (asyncio extension) for the Bookshelf API.

Async Engine
============
Handlers await every database round trip, so one worker serves many
requests concurrently. The engine owns a bounded connection pool:
- pool_size: connections kept for reuse (the hard cap, no overflow)
- pool_timeout: how long a request waits for a free connection before
  sqlalchemy.exc.TimeoutError is raised (mapped to 503 in main.py)
- pool_pre_ping: test connection health before handing it out

The engine is created once per application (in the lifespan handler) and
stored on app.state. Nothing in this module holds a global engine.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives -> open a session (acquires a pooled connection lazily)
2. Handler runs its statements and commits
3. Session closes when the request ends, returning the connection
   to the pool whether the handler succeeded or failed
"""

import logging
from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from bookshelf.config import Settings

logger = logging.getLogger(__name__)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Base.metadata is what the schema initializer creates.
    """
    pass


# =============================================================================
# Engine / Session Factory
# =============================================================================
def create_db_engine(settings: Settings) -> AsyncEngine:
    """
    Build the async engine and its connection pool from settings.

    max_overflow=0 keeps the pool at a fixed capacity; callers beyond
    pool_size queue for at most pool_timeout seconds.
    """
    return create_async_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=0,
        pool_timeout=settings.db_pool_timeout,
        pool_pre_ping=True,
        echo=settings.debug,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create the per-request session factory.

    expire_on_commit=False lets handlers read attributes of loaded rows
    after committing without another round trip.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


# =============================================================================
# Dependency Injection
# =============================================================================
async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency for FastAPI.

    Pulls the session factory the lifespan handler stored on app.state,
    yields a session to the route and closes it when the request ends.
    Closing rolls back anything left uncommitted.

    Usage in Routes:
        @router.get("/books")
        async def list_books(db: DbSession):
            ...
    """
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        yield session


# =============================================================================
# Startup Utilities
# =============================================================================
async def check_connection(engine: AsyncEngine) -> None:
    """
    Verify the database is reachable with a trivial query.

    Raises whatever the driver raises (usually OperationalError);
    callers decide whether that is fatal.
    """
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def init_schema(engine: AsyncEngine) -> None:
    """
    Create the books table if it does not exist yet.

    create_all checks for each table first, so this is safe to run on
    every deployment. It never alters an existing table.
    """
    # Register the models on Base.metadata
    import bookshelf.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Table 'books' checked/created successfully.")
