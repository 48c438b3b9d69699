# Routes package init
"""
Bookshelf Backend — API Routes Package
========================================

What:  HTTP route handlers that accept requests and return responses.
How:   Each route module handles a specific resource or action.

Route Inventory:
    - books.py:   GET    /books              (list with page/limit)
                  GET    /books/{id}         (single book)
                  POST   /books              (create)
                  PUT    /books/{id}         (partial update)
                  DELETE /books/{id}         (delete)
    - health.py:  GET    /health             (service health check)
    - deps.py:    Dependency stages shared by the book routes

Design Principle:
    Routes should be THIN — they handle HTTP concerns only:
    - Declare the validation stages the request must pass
    - Call the service
    - Pick the status code and response model

    Store access and error translation belong in services.
"""
