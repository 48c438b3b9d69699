# Repositories package init
"""
Bookshelf Backend — Data Access Layer
=======================================

What:  Repository classes that wrap an AsyncSession for one table each.
Why:   Services and tests depend on a small async interface
       (list/get_by_id/create/update/delete_by_id) instead of raw SQL.

Repository Inventory:
    - BookRepository: CRUD and offset paging for the `books` table
"""

from bookshelf.repositories.book_repository import BookRepository

__all__ = ["BookRepository"]
