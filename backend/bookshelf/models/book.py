"""
Bookshelf Backend — Book SQLAlchemy Model
===========================================

What:  ORM model representing the `books` table.
Why:   Maps Python objects to database rows for type-safe database operations.
How:   Inherits from SQLAlchemy's DeclarativeBase; `init_models` creates the table.
Who:   Used by BookRepository for CRUD operations.

Table Design:
    - Integer autoincrement primary key: assigned by the store on insert
    - published_date: UTC timestamp; the API accepts date strings and
      normalizes them before they reach this model
    - isbn: stored as submitted (hyphens kept); not unique
    - No soft-delete column: deleting a book removes the row
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from bookshelf.database import Base


class Book(Base):
    """
    Represents a book in the database.

    Lifecycle:
        1. Created by POST /books (store assigns id)
        2. Mutated in place by PUT /books/{id} (only supplied fields)
        3. Removed by DELETE /books/{id}

    Query Patterns:
        - List page: SELECT ... ORDER BY id LIMIT :limit OFFSET :offset
        - Get single book: SELECT ... WHERE id = :id (primary key)
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False)

    # Stored in UTC; SQLite drops the offset, so readers treat naive values as UTC
    published_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    isbn: Mapped[str] = mapped_column(String(32), nullable=False)
    pages: Mapped[int] = mapped_column(Integer, nullable=False)
    language: Mapped[str] = mapped_column(String(64), nullable=False)

    __table_args__ = (
        Index("idx_books_isbn", "isbn"),
    )

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title='{self.title}', isbn='{self.isbn}')>"
