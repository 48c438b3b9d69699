# Validation package init
"""
Bookshelf Backend — Validation Layer
======================================

What:  Input checks that run before any handler touches the store.
Why:   Input errors must be reported with status 400 and never reach the database.

Modules:
    - constraints.py: Constraint tuples, rule predicates (ISBN, ISO dates, ...)
                      and the generic PayloadSchema evaluator
    - books.py:       Create/Update schemas for Book bodies
    - params.py:      Path `id` and query `page`/`limit` validators

Design Principle:
    Rules are data, not decorators. Each schema is an ordered list of
    (field, rule, message) entries and one evaluator walks the list,
    collecting every violation so the client sees all problems at once.
"""

from bookshelf.validation.books import (
    CREATE_BOOK_SCHEMA,
    UPDATE_BOOK_SCHEMA,
    build_book_create,
    build_book_update,
)
from bookshelf.validation.constraints import Constraint, PayloadSchema
from bookshelf.validation.params import parse_book_id, parse_pagination

__all__ = [
    "CREATE_BOOK_SCHEMA",
    "UPDATE_BOOK_SCHEMA",
    "build_book_create",
    "build_book_update",
    "Constraint",
    "PayloadSchema",
    "parse_book_id",
    "parse_pagination",
]
