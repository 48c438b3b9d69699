# Middleware package init
"""
Bookshelf Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: Resolve the correlation ID (safe client value or generated)
    2. Logging: One access line with route template, book id, status, duration
    3. CORS: Applied by FastAPI's CORSMiddleware (handles preflight)

    Responses travel back through the same chain in reverse, so the
    request ID header and the access log line also cover the 4xx/500
    responses written by the registered exception handlers.

Log correlation:
    request_id.RequestIDLogFilter is attached to the logging handlers in
    main.setup_logging, not to the app; it puts the ID on every record.
"""
