"""
Bookshelf Backend — Application Package Initializer
===================================================

What: Marks the `bookshelf` directory as a Python package.
Why:  Enables module imports like `from bookshelf.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend is a small layered CRUD service for one resource (Book):

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, dependency stages
    ├─────────────────────────────────────┤
    │        Validation (Constraints)     │  ← Body schemas, path/query params
    ├─────────────────────────────────────┤
    │         Services (Orchestration)    │  ← Store failures → app exceptions
    ├─────────────────────────────────────┤
    │     Repositories (Data Access)      │  ← BookRepository over AsyncSession
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never touch the session directly; they receive a BookService that
    wraps a BookRepository bound to the request's session.
"""

__version__ = "1.0.0"
