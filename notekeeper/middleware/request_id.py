"""
NoteKeeper Backend - Request ID Middleware
===========================================

What:  Assigns a correlation id to each request and returns it in the
       X-Request-ID response header.
How:   Uses the client's X-Request-ID when present, otherwise a short UUID;
       stores it in a ContextVar (read by loggers and exception handlers) and
       on request.state.

Every error body carries this id as `request_id`, so a client report can be
matched to the server log lines of the same request.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware that assigns a unique ID to each request for tracing."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 hex chars are enough to correlate log lines of one request
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid

        return response
