"""
ChefNotes Backend — Request ID Middleware
===========================================

What:  Assigns a short correlation id to each request and echoes it back.
Why:   Every log line and every error body of one request carries the same id,
       so a failed conversion reported from the browser can be found in logs.
How:   Reads X-Request-ID from the client or generates one, stores it in a
       ContextVar for loggers and handlers, returns it in the response header.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Accepts a client-provided X-Request-ID, otherwise generates an 8-char id."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
