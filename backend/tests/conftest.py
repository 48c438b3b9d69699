"""
Bookshelf Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (in-memory DB, mocked
       repository, API client, sample payloads).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── db_engine: In-memory SQLite engine with the books table created
    │   ├── session_factory: async_sessionmaker bound to db_engine
    │   │   ├── db_session: One AsyncSession for repository tests
    │   │   └── app: Fresh FastAPI app with get_db_session overridden
    │   │       └── test_client: HTTPX AsyncClient over ASGITransport
    ├── mock_repository: AsyncMock standing in for BookRepository
    ├── sample_book_payload: Valid POST /books body
    └── sample_book: Unsaved Book ORM instance with an id
"""

import os
from datetime import datetime, timezone
from typing import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Override settings for testing BEFORE any bookshelf imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DB_CREATE_TABLES"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from bookshelf.database import get_db_session, init_models  # noqa: E402
from bookshelf.main import create_app  # noqa: E402
from bookshelf.models.book import Book  # noqa: E402
from bookshelf.repositories.book_repository import BookRepository  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    In-memory SQLite engine, one per test.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


# ══════════════════════════════════════════════════════════════════════════
# Application Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def app(session_factory):
    """
    Fresh FastAPI app whose session dependency uses the test engine.

    Tests may add further entries to app.dependency_overrides.
    """
    application = create_app()

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db_session] = override_get_db_session
    return application


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient configured to talk to the test app.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/books")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ══════════════════════════════════════════════════════════════════════════
# Data Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_repository():
    """AsyncMock with BookRepository's interface; every method is awaitable."""
    return AsyncMock(spec=BookRepository)


@pytest.fixture
def sample_book_payload():
    """A valid create body, as a client would send it."""
    return {
        "title": "T",
        "author": "A",
        "publishedDate": "2023-11-21",
        "isbn": "978-3-16-148410-0",
        "pages": 200,
        "language": "English",
    }


@pytest.fixture
def sample_book():
    """Book ORM instance as the repository would return it."""
    return Book(
        id=1,
        title="T",
        author="A",
        published_date=datetime(2023, 11, 21, tzinfo=timezone.utc),
        isbn="978-3-16-148410-0",
        pages=200,
        language="English",
    )
