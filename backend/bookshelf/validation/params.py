"""
Bookshelf Backend — Path and Query Parameter Validators
=========================================================

What:  Shape checks for `/books/{id}` and `/books?page=&limit=`.
Why:   A malformed id or page must be rejected with 400 before the store is queried.

Rules:
    id:          ASCII digits only (^\\d+$). Leading zeros are allowed ("007" → 7).
    page/limit:  Optional. Empty or missing → default. Otherwise digits only
                 and strictly positive ("0" matches the pattern but is rejected).
"""

import re
from typing import Optional

from bookshelf.exceptions import BadRequestError
from bookshelf.schemas.book import PageParams

INVALID_ID_MESSAGE = "Invalid ID parameter. Must be a positive integer."
DEFAULT_PAGE = 1

_DIGITS = re.compile(r"\d+", re.ASCII)


def parse_book_id(raw: str) -> int:
    """Validate a path id and return it as an int."""
    if not _DIGITS.fullmatch(raw):
        raise BadRequestError(INVALID_ID_MESSAGE, field="id", context={"value": raw})
    return int(raw)


def _parse_positive(raw: Optional[str], name: str, default: int) -> int:
    if not raw:
        return default
    if not _DIGITS.fullmatch(raw) or int(raw) <= 0:
        raise BadRequestError(
            f"Invalid {name} parameter. Must be a positive integer.",
            field=name,
            context={"value": raw},
        )
    return int(raw)


def parse_pagination(
    page: Optional[str],
    limit: Optional[str],
    default_limit: int,
) -> PageParams:
    """Validate page then limit; the first bad one is reported."""
    return PageParams(
        page=_parse_positive(page, "page", DEFAULT_PAGE),
        limit=_parse_positive(limit, "limit", default_limit),
    )
