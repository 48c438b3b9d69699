"""
Bookshelf Backend — Route Dependencies (Request Pipeline Stages)
==================================================================

What:  FastAPI dependencies that validate inputs and build the service.
Why:   Each stage either returns a typed value or raises; FastAPI stops at
       the first exception and the global handlers write the response.
How:   Route functions declare stages in the order they must run:

    PUT /books/{id}:
        valid_book_id → update_book_payload → get_book_service → handler
             │                  │                    │
        400 bad id      400 {"errors": [...]}   opens the DB session

    The database session is only opened by get_book_service, which is
    declared last, so rejected input never reaches the store.
"""

import json
import logging
from typing import Any, Dict, Optional

from fastapi import Depends, Path, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.config import settings
from bookshelf.database import get_db_session
from bookshelf.exceptions import BadRequestError, ValidationError
from bookshelf.repositories.book_repository import BookRepository
from bookshelf.schemas.book import BookCreate, BookUpdate, PageParams
from bookshelf.services.book_service import BookService
from bookshelf.validation import (
    CREATE_BOOK_SCHEMA,
    UPDATE_BOOK_SCHEMA,
    build_book_create,
    build_book_update,
    parse_book_id,
    parse_pagination,
)
from bookshelf.validation.constraints import PayloadSchema

logger = logging.getLogger(__name__)


# ── Persistence Handles ───────────────────────────────────────────────────

async def get_book_repository(
    db: AsyncSession = Depends(get_db_session),
) -> BookRepository:
    """Repository bound to this request's session."""
    return BookRepository(db)


async def get_book_service(
    repository: BookRepository = Depends(get_book_repository),
) -> BookService:
    return BookService(repository, strict_not_found=settings.strict_not_found)


# ── Parameter Stages ──────────────────────────────────────────────────────

def valid_book_id(
    book_id: str = Path(description="Numeric book id"),
) -> int:
    """Path id must be digits only; returns it as an int."""
    return parse_book_id(book_id)


def page_params(
    page: Optional[str] = Query(default=None, description="1-based page number (default 1)"),
    limit: Optional[str] = Query(default=None, description="Items per page (default 10)"),
) -> PageParams:
    """
    Query strings are taken raw so "abc", "-1" and "0" reach our own check
    and produce the API's 400 message instead of FastAPI's 422.
    """
    return parse_pagination(page, limit, default_limit=settings.default_page_size)


# ── Body Stages ───────────────────────────────────────────────────────────

async def read_json_object(request: Request) -> Dict[str, Any]:
    """
    Parse the request body as a JSON object.

    An empty body counts as {} so that a bare POST reports the missing fields.
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except ValueError:
        raise BadRequestError("Malformed JSON body", field="body")
    if not isinstance(payload, dict):
        raise BadRequestError("Request body must be a JSON object", field="body")
    return payload


def _check(schema: PayloadSchema, payload: Dict[str, Any]) -> None:
    errors = schema.validate(payload)
    if errors:
        raise ValidationError(errors, context={"schema": schema.name})


async def create_book_payload(
    payload: Dict[str, Any] = Depends(read_json_object),
) -> BookCreate:
    _check(CREATE_BOOK_SCHEMA, payload)
    return build_book_create(payload)


async def update_book_payload(
    payload: Dict[str, Any] = Depends(read_json_object),
) -> BookUpdate:
    _check(UPDATE_BOOK_SCHEMA, payload)
    return build_book_update(payload)
