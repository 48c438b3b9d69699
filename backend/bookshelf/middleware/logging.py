"""
Bookshelf Backend — Request Logging Middleware
================================================

What:  One access log line per HTTP request on the "bookshelf.access" logger.
How:   Times call_next, then reads what routing left in the ASGI scope: the
       matched route template and the `book_id` path parameter. Grouping by
       template keeps `/books/1` and `/books/2` under one key.

Example lines (request ID comes from RequestIDLogFilter):
    GET /books 200 3.1ms route=/books book_id=-
    PUT /books/7 400 1.2ms route=/books/{book_id} book_id=7
    GET /authors 404 0.4ms route=- book_id=-

Extra fields on the record:
    method, path, route, book_id, status, duration_ms, client_ip

Log levels by status:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

`/health` is not logged. Bodies, query strings and headers never are.
"""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("bookshelf.access")

UNLOGGED_PATHS = frozenset({"/health"})


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def route_template(request: Request) -> Optional[str]:
    """Path template of the route that handled the request, if any matched."""
    route = request.scope.get("route")
    return getattr(route, "path", None)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, route template, book id, status and duration."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in UNLOGGED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        # Filled in by the router while handling call_next
        route = route_template(request)
        book_id = request.scope.get("path_params", {}).get("book_id")

        logger.log(
            _level_for(response.status_code),
            "%s %s %d %.1fms route=%s book_id=%s",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            route or "-",
            book_id or "-",
            extra={
                "method": request.method,
                "path": request.url.path,
                "route": route,
                "book_id": book_id,
                "status": response.status_code,
                "duration_ms": round(duration_ms, 2),
                "client_ip": request.client.host if request.client else "unknown",
            },
        )
        return response
