"""
Bookshelf API Application Package

A personal library catalog: books you own and books you want.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: Async SQLAlchemy engine, sessions and schema creation
- db_init.py: Standalone schema initializer (bookshelf-init-db)
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection aliases
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas
- routers/: API route handlers
"""

__version__ = "0.1.0"
