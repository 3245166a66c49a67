"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() returns a configured app
   - Tests build a fresh app per test against their own database

2. Lifespan Events
   - startup: build the engine/pool, check the database with SELECT 1,
     create the books table if missing. A failed check aborts startup,
     so the server never serves traffic without a database.
   - shutdown: dispose of the pool

3. Exception Handlers
   - Every error body has the same shape: {"error": "<message>"}
   - Validation errors -> 400 (first problem only)
   - Pool exhausted -> 503, other database errors -> 500
   - Internal details are logged, never sent to clients
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookshelf import __version__
from bookshelf.config import Settings, get_settings
from bookshelf.database import (
    check_connection,
    create_db_engine,
    create_session_factory,
    init_schema,
)
from bookshelf.routers import books_router

# =============================================================================
# Logging Configuration
# =============================================================================
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Validation error types that mean "the client did not send this field"
REQUIRED_ERROR_TYPES = {"missing", "string_too_short", "blank_string"}


def describe_validation_error(exc: RequestValidationError) -> str:
    """
    Turn the first validation error into a short client-facing message.

    Errors are listed in field declaration order, so reporting only the
    first one gives a stable "first failure wins" message, e.g.
    "author is required" or "Invalid rating: Input should be less than
    or equal to 5".
    """
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    error = errors[0]

    if error["type"] == "json_invalid":
        return "Request body must be valid JSON"

    field = ".".join(str(part) for part in error["loc"] if part != "body")
    if not field:
        return f"Invalid request body: {error['msg']}"
    if error["type"] in REQUIRED_ERROR_TYPES:
        return f"{field} is required"
    return f"Invalid {field}: {error['msg']}"


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield: Runs on startup
    Code after yield: Runs on shutdown

    The engine lives on app.state for the lifetime of the app; get_db
    reads the session factory from there.
    """
    app_settings: Settings = app.state.settings

    # ----- STARTUP -----
    logger.info(f"Starting {app_settings.app_name}...")
    engine = create_db_engine(app_settings)
    try:
        await check_connection(engine)
        logger.info("Database connected successfully.")
        if app_settings.init_db_on_startup:
            await init_schema(engine)
    except (SQLAlchemyError, OSError) as exc:
        logger.error(f"Error connecting to database: {exc}")
        await engine.dispose()
        raise

    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    logger.info(f"{app_settings.app_name} ready")

    yield  # Application runs here

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {app_settings.app_name}...")
    await engine.dispose()


# =============================================================================
# Application Factory
# =============================================================================
def create_app(app_settings: Settings | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use; defaults to get_settings()

    Returns:
        Configured FastAPI application instance
    """
    app_settings = app_settings or get_settings()

    app = FastAPI(
        title=app_settings.app_name,
        description="A personal catalog of books you own and books you want.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    # The catalog is meant to be called from a browser frontend served
    # from another origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.allowed_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Render HTTPException (404, 405, ...) as {"error": detail}."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """
        Handle invalid request bodies.

        FastAPI answers 422 by default; the catalog reports invalid input
        as 400 with a single descriptive message.
        """
        message = describe_validation_error(exc)
        logger.info(f"Rejected {request.method} {request.url.path}: {message}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": message},
        )

    @app.exception_handler(PoolTimeoutError)
    async def pool_timeout_handler(
        request: Request,
        exc: PoolTimeoutError,
    ) -> JSONResponse:
        """No pooled connection became free within db_pool_timeout."""
        logger.error(f"Connection pool exhausted: {exc}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"error": "Server busy, please retry later"},
        )

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        """
        Handle SQLAlchemy database errors.

        Logs the actual error for debugging while hiding details from users.
        """
        logger.error(
            f"Database error on {request.method} {request.url.path}: {exc}",
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "A database error occurred. Please try again later."},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Catch-all exception handler.

        The exception is logged with its traceback; the client only gets a
        generic message, in debug mode too.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "An internal error occurred."},
        )

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    app.include_router(books_router, prefix="/api")

    # -------------------------------------------------------------------------
    # Health Check Endpoints
    # -------------------------------------------------------------------------
    @app.get(
        "/",
        tags=["Health"],
        summary="Liveness",
        response_class=PlainTextResponse,
    )
    async def root() -> str:
        """Plain-text liveness message."""
        return "Bookshelf API is running!"

    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check that the API can reach its database.",
    )
    async def health_check(request: Request) -> JSONResponse:
        """
        Readiness check.

        Runs the same SELECT 1 check used at startup; answers 503 when the
        database is unreachable so load balancers stop routing here.
        """
        try:
            await check_connection(request.app.state.engine)
        except (SQLAlchemyError, OSError) as exc:
            logger.warning(f"Health check failed: {exc}")
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={
                    "status": "unhealthy",
                    "app": app_settings.app_name,
                    "database": "unreachable",
                },
            )

        pool = request.app.state.engine.pool
        return JSONResponse(
            content={
                "status": "healthy",
                "app": app_settings.app_name,
                "version": __version__,
                "database": "connected",
                "pool": pool.status(),
            },
        )

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn bookshelf.main:app

app = create_app()


def run() -> None:
    """Run the development server (console script: bookshelf-api)."""
    import uvicorn

    uvicorn.run(
        "bookshelf.main:app",
        host=settings.host,
        port=settings.api_port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
