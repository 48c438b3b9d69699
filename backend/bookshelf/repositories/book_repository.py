"""
Bookshelf Backend — Book Repository (Data Access Interface)
=============================================================

What:  CRUD and paging over the `books` table through one AsyncSession.
Why:   Keeps SQL out of the service; the service sees Books, None and bool.
How:   Each instance is bound to the request's session. Writes are flushed
       (so ids are assigned and constraint errors surface here); the commit
       happens when the session dependency closes.

Not-found signals:
    get_by_id / update → None
    delete_by_id       → False

Out-of-range input:
    Path ids and page/limit are only shape-checked, so any digit string gets
    here. An id above the INTEGER column range cannot exist and is reported
    as not found without a query. An offset above the BIGINT range is past
    every row (empty page); a limit above it is clamped.

Store errors (sqlalchemy.exc.SQLAlchemyError) propagate unchanged; turning
them into API errors is the service's job.
"""

import logging
from typing import Any, List, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.models.book import Book

logger = logging.getLogger(__name__)

# books.id is INTEGER (int4 on PostgreSQL)
MAX_BOOK_ID = 2**31 - 1
# LIMIT/OFFSET bind as BIGINT on PostgreSQL and INTEGER (int8) on SQLite
MAX_ROW_COUNT = 2**63 - 1


class BookRepository:
    """Async data access for Book records."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _load(self, book_id: int) -> Optional[Book]:
        if book_id > MAX_BOOK_ID:
            logger.debug("Book id %s is outside the id range", book_id)
            return None
        return await self.session.get(Book, book_id)

    async def list(self, offset: int, limit: int) -> List[Book]:
        """
        Up to `limit` books starting at `offset`, in insertion (id) order.

        Query plan:
            SELECT * FROM books ORDER BY id LIMIT :limit OFFSET :offset
        """
        if offset > MAX_ROW_COUNT:
            return []
        result = await self.session.execute(
            select(Book)
            .order_by(Book.id)
            .offset(offset)
            .limit(min(limit, MAX_ROW_COUNT))
        )
        return list(result.scalars().all())

    async def get_by_id(self, book_id: int) -> Optional[Book]:
        return await self._load(book_id)

    async def create(self, fields: Mapping[str, Any]) -> Book:
        """Insert a new row and return it with its assigned id."""
        book = Book(**fields)
        self.session.add(book)
        await self.session.flush()
        logger.info("Book record created: %s", book.id)
        return book

    async def update(self, book_id: int, changes: Mapping[str, Any]) -> Optional[Book]:
        """
        Apply `changes` to an existing book.

        Only keys present in `changes` are written; everything else keeps its
        stored value.
        """
        book = await self._load(book_id)
        if book is None:
            return None
        for field, value in changes.items():
            setattr(book, field, value)
        await self.session.flush()
        logger.info("Book %s updated: %s", book_id, sorted(changes))
        return book

    async def delete_by_id(self, book_id: int) -> bool:
        book = await self._load(book_id)
        if book is None:
            return False
        await self.session.delete(book)
        await self.session.flush()
        logger.info("Book %s deleted", book_id)
        return True
