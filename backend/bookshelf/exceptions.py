"""
Bookshelf Backend — Custom Exception Hierarchy
================================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages, without leaking store details.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return JSON error bodies with the matching HTTP status code.
Who:   Raised by validation stages and services; caught by global handlers.

Exception Hierarchy:
    BookshelfError (base)        → 500 {"error": message}
    ├── ValidationError          → 400 {"errors": [message, ...]}
    ├── BadRequestError          → 400 {"error": message}
    ├── NotFoundError            → 404 {"error": "Book not found"}
    └── DatabaseError            → 500 {"error": message}
"""

from typing import Any, Dict, List, Optional


class BookshelfError(Exception):
    """
    Base exception for all Bookshelf application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "Internal Server Error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BookshelfError):
    """
    Raised when a request body violates its schema.

    What:    Carries every constraint violation found, not just the first.
    When:    POST /books or PUT /books/{id} with an invalid payload.
    HTTP:    400 Bad Request

    Example response:
        {
            "errors": [
                "isbn must be an ISBN",
                "pages must not be less than 1"
            ]
        }
    """

    def __init__(
        self,
        errors: List[str],
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message="; ".join(errors) or "Validation failed", context=context)
        self.errors = list(errors)


class BadRequestError(BookshelfError):
    """
    Raised for a single malformed input: path id, page/limit, or a body
    that is not a JSON object.

    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Bad Request",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(BookshelfError):
    """
    Raised when a requested resource does not exist.

    What:    The repository returned its not-found signal (None / False).
    When:    GET /books/{id} for an unknown id; update/delete only when
             STRICT_NOT_FOUND is enabled.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(BookshelfError):
    """
    Raised when a store operation fails.

    What:    A query, insert, update, or delete failed (connection loss,
             constraint violation, ...), or update/delete targeted a missing id.
    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client names the operation only
        ("Failed to create book"). The original cause goes into `context`
        and the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
