"""
Bookshelf Backend — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract for the /books resource.
Why:   Typed hand-off between layers, response serialization, OpenAPI docs.
How:   Bodies are checked by the constraint schemas in bookshelf.validation
       first; the models here carry already-valid values into the service
       and shape what the API returns.

Design Decision:
    Request bodies are not validated by Pydantic directly: the API reports
    every violated constraint as a flat list of messages, which the
    validation layer produces. Once a body passes, it is converted into
    BookCreate/BookUpdate so the service works with typed values
    (datetime, int) instead of raw JSON.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_serializer


# ══════════════════════════════════════════════════════════════════════════
# Input Models — validated values handed to the service
# ══════════════════════════════════════════════════════════════════════════


class BookCreate(BaseModel):
    """All fields of a new book; published_date already normalized to UTC."""
    title: str
    author: str
    published_date: datetime
    isbn: str
    pages: int
    language: str


class BookUpdate(BaseModel):
    """
    Partial book fields for PUT /books/{id}.

    Only the fields the client supplied are set; use
    `model_dump(exclude_unset=True)` to get exactly those.
    """
    title: Optional[str] = None
    author: Optional[str] = None
    published_date: Optional[datetime] = None
    isbn: Optional[str] = None
    pages: Optional[int] = None
    language: Optional[str] = None


class PageParams(BaseModel):
    """
    What:  Validated pagination for GET /books.
    How:   offset = (page - 1) * limit
    """
    page: int = Field(default=1, ge=1, description="1-based page number")
    limit: int = Field(default=10, ge=1, description="Items per page")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class BookResponse(BaseModel):
    """
    What:  JSON representation of a stored book.
    Who:   Returned by every /books endpoint except DELETE.

    publishedDate is always rendered in UTC with millisecond precision and a
    Z suffix ("2023-11-21T00:00:00.000Z"), whatever the store hands back.
    """
    id: int = Field(description="Store-assigned identifier")
    title: str = Field(description="Book title")
    author: str = Field(description="Author name")
    published_date: datetime = Field(
        validation_alias=AliasChoices("published_date", "publishedDate"),
        serialization_alias="publishedDate",
        description="Publication date (ISO 8601 UTC timestamp)",
    )
    isbn: str = Field(description="ISBN-10 or ISBN-13")
    pages: int = Field(description="Page count")
    language: str = Field(description="Language of the book")

    model_config = {"from_attributes": True}

    @field_serializer("published_date")
    def serialize_published_date(self, value: datetime) -> str:
        # SQLite returns naive datetimes; stored values are UTC
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        utc = value.astimezone(timezone.utc)
        return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ErrorResponse(BaseModel):
    """
    Single-failure error body.

    Example:
        {"error": "Book not found"}
    """
    error: str = Field(description="Human-readable error description")


class ValidationErrorResponse(BaseModel):
    """
    Body-schema failure listing every violated constraint.

    Example:
        {"errors": ["isbn must be an ISBN", "pages must not be less than 1"]}
    """
    errors: List[str] = Field(description="One message per failed constraint")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for monitoring and load balancer checks.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
