# Services package init
"""
Bookshelf Backend — Services Layer
====================================

What:  Orchestration layer sitting between routes (HTTP) and repositories (persistence).
Why:   Routes handle HTTP; services call the store and translate its failures.
How:   Services receive their repository in the constructor. Routes obtain
       them through FastAPI dependencies, one instance per request.

Service Inventory:
    - BookService: list/get/create/update/delete for the Book resource
"""

from bookshelf.services.book_service import BookService

__all__ = ["BookService"]
