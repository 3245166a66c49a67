"""
Schema Initializer

Creates the books table if it does not exist, then exits.

USAGE:
    bookshelf-init-db
    # or
    python -m bookshelf.db_init

Safe to run on every deployment: an existing table is left untouched.
Exits with status 1 when the database cannot be reached or the statement
fails.
"""

import asyncio
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from bookshelf.config import Settings, get_settings
from bookshelf.database import create_db_engine, init_schema

logger = logging.getLogger(__name__)


async def initialize_database(settings: Settings) -> None:
    """Open a short-lived engine, create the schema and dispose of it."""
    engine = create_db_engine(settings)
    try:
        await init_schema(engine)
    finally:
        await engine.dispose()
        logger.info("Initialization connection closed.")


def main() -> int:
    """
    Console entry point.

    Returns:
        Process exit status (0 on success, 1 on failure)
    """
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        asyncio.run(initialize_database(settings))
    except (SQLAlchemyError, OSError) as exc:
        logger.error(f"Error initializing database: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
