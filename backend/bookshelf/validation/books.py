"""
Bookshelf Backend — Book Body Schemas
=======================================

What:  Constraint lists for POST /books (create) and PUT /books/{id} (update).
How:   Field names are the JSON names clients send (camelCase publishedDate).

    Field          Rules (in reporting order)
    ─────────────  ─────────────────────────────────────────────
    title          not empty, string
    author         not empty, string
    publishedDate  not empty, ISO 8601 date string
    isbn           not empty, ISBN-10/13
    pages          >= 1, integer
    language       not empty, string

The update schema reuses the same list as a partial schema: fields are
optional, but a supplied field must pass every rule above.
"""

from typing import Any, Dict, List, Mapping

from bookshelf.schemas.book import BookCreate, BookUpdate
from bookshelf.validation.constraints import (
    Constraint,
    PayloadSchema,
    is_int,
    is_isbn,
    is_iso_date_string,
    is_not_empty,
    is_string,
    min_value,
    parse_iso_date,
)


def _text_field(field: str) -> List[Constraint]:
    return [
        Constraint(field, is_not_empty, f"{field} should not be empty"),
        Constraint(field, is_string, f"{field} must be a string"),
    ]


BOOK_CONSTRAINTS: List[Constraint] = [
    *_text_field("title"),
    *_text_field("author"),
    Constraint("publishedDate", is_not_empty, "publishedDate should not be empty"),
    Constraint("publishedDate", is_iso_date_string, "publishedDate must be a valid ISO 8601 date string"),
    Constraint("isbn", is_not_empty, "isbn should not be empty"),
    Constraint("isbn", is_isbn, "isbn must be an ISBN"),
    Constraint("pages", min_value(1), "pages must not be less than 1"),
    Constraint("pages", is_int, "pages must be an integer number"),
    *_text_field("language"),
]

CREATE_BOOK_SCHEMA = PayloadSchema("CreateBook", BOOK_CONSTRAINTS)
UPDATE_BOOK_SCHEMA = PayloadSchema("UpdateBook", BOOK_CONSTRAINTS, partial=True)


def _typed_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Map JSON names to model names and convert values past validation."""
    typed: Dict[str, Any] = {}
    for key, value in fields.items():
        if key == "publishedDate":
            typed["published_date"] = parse_iso_date(value)
        elif key == "pages":
            typed["pages"] = int(value)
        else:
            typed[key] = value
    return typed


def build_book_create(payload: Mapping[str, Any]) -> BookCreate:
    """Convert a payload that passed CREATE_BOOK_SCHEMA into a BookCreate."""
    return BookCreate(**_typed_fields(CREATE_BOOK_SCHEMA.extract(payload)))


def build_book_update(payload: Mapping[str, Any]) -> BookUpdate:
    """Convert a payload that passed UPDATE_BOOK_SCHEMA; only supplied fields are set."""
    return BookUpdate(**_typed_fields(UPDATE_BOOK_SCHEMA.extract(payload)))
