"""
Bookshelf Backend — Request ID Middleware
===========================================

What:  Gives every request a correlation ID, returns it in X-Request-ID, and
       stamps it on every log record written while the request is handled.
How:   RequestIDMiddleware stores the ID in a ContextVar; RequestIDLogFilter
       (attached to the handlers in main.setup_logging) copies it onto each
       LogRecord as `request_id`, so the format string can print it.

Client-supplied IDs:
    Accepted only if they are 1-64 characters of [A-Za-z0-9._:-]. Anything
    else (spaces, quotes, oversized values) is replaced by a generated ID so
    a caller cannot forge log lines or bloat every entry.

    X-Request-ID: trace-123        → trace-123
    X-Request-ID: "a b"            → 3f9c2e1a (generated)
    (absent)                       → 3f9c2e1a (generated)
"""

import logging
import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
NO_REQUEST_ID = "-"

_CLIENT_REQUEST_ID = re.compile(r"[A-Za-z0-9._:-]{1,64}", re.ASCII)

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def resolve_request_id(client_value: Optional[str]) -> str:
    """The client's ID when it is safe to log, otherwise a fresh one."""
    if client_value and _CLIENT_REQUEST_ID.fullmatch(client_value):
        return client_value
    return new_request_id()


class RequestIDLogFilter(logging.Filter):
    """Adds `record.request_id` ("-" outside a request) to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or NO_REQUEST_ID
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Outermost app middleware: sets the ID before anything logs."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))

        # Not reset afterwards: the catch-all 500 handler runs outside this
        # middleware in the same task and still logs with the ID
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
