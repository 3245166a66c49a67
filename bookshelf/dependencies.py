"""
Dependency Injection Module

Reusable FastAPI dependencies.

Annotated attaches the Depends() marker to the type hint, so routes write

    async def list_books(db: DbSession):

instead of repeating `db: AsyncSession = Depends(get_db)` everywhere.
Tests replace get_db through app.dependency_overrides.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.database import get_db

DbSession = Annotated[AsyncSession, Depends(get_db)]
