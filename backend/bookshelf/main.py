"""
Bookshelf Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, error translation, route
       mounting, and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn bookshelf.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │  Request ID  │→│   Logging    │→│    CORS     │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────────────┐ ┌──────────────┐  │
    │  │ /books  (list/get/create/    │ │ GET /health  │  │
    │  │          update/delete)      │ │              │  │
    │  └──────────────────────────────┘ └──────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Database→500 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → create missing tables (DB_CREATE_TABLES) → ready log
    Shutdown: dispose database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookshelf import __version__
from bookshelf.config import settings
from bookshelf.database import dispose_engine, init_models
from bookshelf.exceptions import (
    BadRequestError,
    BookshelfError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from bookshelf.middleware.logging import RequestLoggingMiddleware
from bookshelf.middleware.request_id import RequestIDLogFilter, RequestIDMiddleware
from bookshelf.routes import books, health

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s
    Handlers: stdout always; LOG_FILE as well when configured. Each handler
    carries RequestIDLogFilter, so records from any logger (ours, uvicorn,
    SQLAlchemy) have `request_id` ("-" outside a request).
    """
    log_format = "%(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s"

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))
    for handler in handlers:
        handler.addFilter(RequestIDLogFilter())

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=handlers,
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Run startup work before yield and cleanup after it."""
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Bookshelf Backend starting up...")

    if settings.db_create_tables:
        try:
            await init_models()
            logger.info("Database tables ready")
        except Exception as e:
            # Keep serving: /health reports the database as disconnected
            logger.error("Could not create database tables: %s", str(e))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Bookshelf Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError         → 400 {"errors": [...]}
        RequestValidationError  → 400 {"errors": [...]}
        BadRequestError         → 400 {"error": message}
        NotFoundError           → 404 {"error": "Book not found"}
        DatabaseError           → 500 {"error": "Failed to <op> book(s)"}
        BookshelfError (base)   → 500 {"error": message}
        HTTPException           → its status, {"error": detail}
        Exception (fallback)    → 500 {"error": "Internal Server Error"}

    Store errors and stack traces are logged server-side only.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        """Body failed its schema — list every violated constraint."""
        logger.warning("Validation errors: %s", exc.errors)
        return JSONResponse(status_code=400, content={"errors": exc.errors})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """FastAPI-level parameter errors use the same 400 shape as ours."""
        errors = [
            f"{err['loc'][-1] if err.get('loc') else 'request'} {err.get('msg', 'is invalid')}"
            for err in exc.errors()
        ]
        logger.warning("Request validation errors: %s", errors)
        return JSONResponse(status_code=400, content={"errors": errors})

    @app.exception_handler(BadRequestError)
    async def handle_bad_request(request: Request, exc: BadRequestError):
        """Malformed id, page, limit or body."""
        logger.warning("Bad request: %s | Context: %s", exc.message, exc.context)
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"error": exc.message})

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """Store failure — operation message to the client, context to the log."""
        logger.error("Database error: %s | Context: %s", exc.message, exc.context)
        return JSONResponse(status_code=500, content={"error": exc.message})

    @app.exception_handler(BookshelfError)
    async def handle_app_error(request: Request, exc: BookshelfError):
        logger.error("Application error: %s | Context: %s", exc.message, exc.context)
        return JSONResponse(status_code=500, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """Unknown routes (404) and wrong methods (405) in the API's error shape."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all for truly unexpected errors.

        Stack trace is logged server-side only.
        """
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Tests build a fresh app per test and override get_db_session on it.
    """
    app = FastAPI(
        title="Bookshelf API",
        description="CRUD service for books with validation, pagination and uniform error bodies.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # added CORS → Logging → RequestID, executed RequestID → Logging → CORS
    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(books.router)
    app.include_router(health.router)

    return app


# uvicorn expects `bookshelf.main:app` to be importable
app = create_app()
