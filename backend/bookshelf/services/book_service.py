"""
Bookshelf Backend — Book Service (Resource Handlers)
======================================================

What:  The five book operations: list, get, create, update, delete.
Why:   Keeps store calls and error translation out of the route functions.
How:   Calls BookRepository, converts ORM rows to BookResponse, and turns any
       failure from the store into an application exception.
Who:   Built per request by bookshelf.routes.deps.get_book_service.

Error Translation:
    ┌───────────┬──────────────────────────┬──────────────────────────────┐
    │ Operation │ Store raised             │ Repository said "not found"  │
    ├───────────┼──────────────────────────┼──────────────────────────────┤
    │ list      │ 500 Failed to fetch books│ —                            │
    │ get       │ 500 Failed to fetch book │ 404 Book not found           │
    │ create    │ 500 Failed to create book│ —                            │
    │ update    │ 500 Failed to update book│ 500 (404 if strict_not_found)│
    │ delete    │ 500 Failed to delete book│ 500 (404 if strict_not_found)│
    └───────────┴──────────────────────────┴──────────────────────────────┘

    The caught exception is logged with its type; only the operation
    message reaches the client.
"""

import logging
from typing import Any, List

from bookshelf.exceptions import BookshelfError, DatabaseError, NotFoundError
from bookshelf.repositories.book_repository import BookRepository
from bookshelf.schemas.book import BookCreate, BookResponse, BookUpdate, PageParams

logger = logging.getLogger(__name__)


class BookService:
    """
    Orchestrates book operations over an injected repository.

    Attributes:
        repository:       Data access bound to the current request's session
        strict_not_found: Report update/delete of a missing id as 404
    """

    def __init__(self, repository: BookRepository, strict_not_found: bool = False):
        self.repository = repository
        self.strict_not_found = strict_not_found

    def _store_failure(self, message: str, exc: Exception, **context: Any) -> BookshelfError:
        """Log the store's exception and build the client-facing error."""
        if isinstance(exc, BookshelfError):
            return exc
        context["error_type"] = type(exc).__name__
        logger.error("%s: %s | Context: %s", message, str(exc), context, exc_info=True)
        return DatabaseError(message=message, context=context)

    def _missing_on_write(self, message: str, book_id: int) -> BookshelfError:
        if self.strict_not_found:
            return NotFoundError(resource="book", resource_id=book_id)
        logger.warning("%s: book %s does not exist", message, book_id)
        return DatabaseError(message=message, context={"book_id": book_id, "reason": "not_found"})

    async def list_books(self, params: PageParams) -> List[BookResponse]:
        """
        One page of books.

        Returns an empty list when the page starts past the last record.
        """
        try:
            books = await self.repository.list(offset=params.offset, limit=params.limit)
        except Exception as e:
            raise self._store_failure(
                "Failed to fetch books", e, page=params.page, limit=params.limit
            )
        return [BookResponse.model_validate(book) for book in books]

    async def get_book(self, book_id: int) -> BookResponse:
        """
        Raises:
            NotFoundError: No book with this id (→ 404)
            DatabaseError: Query failed (→ 500)
        """
        try:
            book = await self.repository.get_by_id(book_id)
        except Exception as e:
            raise self._store_failure("Failed to fetch book", e, book_id=book_id)

        if book is None:
            raise NotFoundError(resource="book", resource_id=book_id)
        return BookResponse.model_validate(book)

    async def create_book(self, data: BookCreate) -> BookResponse:
        try:
            book = await self.repository.create(data.model_dump())
        except Exception as e:
            raise self._store_failure("Failed to create book", e, isbn=data.isbn)
        return BookResponse.model_validate(book)

    async def update_book(self, book_id: int, changes: BookUpdate) -> BookResponse:
        """
        Apply the supplied fields only.

        `changes` is built from the request body with unsupplied fields left
        unset, so exclude_unset yields exactly what the client sent.
        """
        fields = changes.model_dump(exclude_unset=True)
        try:
            book = await self.repository.update(book_id, fields)
        except Exception as e:
            raise self._store_failure(
                "Failed to update book", e, book_id=book_id, fields=sorted(fields)
            )

        if book is None:
            raise self._missing_on_write("Failed to update book", book_id)
        return BookResponse.model_validate(book)

    async def delete_book(self, book_id: int) -> None:
        try:
            deleted = await self.repository.delete_by_id(book_id)
        except Exception as e:
            raise self._store_failure("Failed to delete book", e, book_id=book_id)

        if not deleted:
            raise self._missing_on_write("Failed to delete book", book_id)
