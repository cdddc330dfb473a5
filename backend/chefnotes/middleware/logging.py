"""
ChefNotes Backend — Request Logging Middleware
================================================

What:  One access log line per HTTP request, with status and duration.
Why:   Conversions take seconds (Gemini dominates) while CRUD takes
       milliseconds; the duration field makes slow conversions easy to spot.
How:   Times the downstream call and logs method, path, status, duration,
       request id and client IP. Level follows the status class.

What we log vs what we DON'T log (privacy):
    ✅ Log: method, path, status, duration, IP, request ID
    ❌ Don't log: request bodies (audio payloads, note text)
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from chefnotes.middleware.request_id import request_id_var

logger = logging.getLogger("chefnotes.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs structured information about each HTTP request and response.

    Typical durations:
        - GET /api/recipes/{id}: 1-5ms (in-memory store)
        - POST /api/recipes/{id}/convert-to-recipe: 2000-10000ms (Gemini call)
    """

    # Health probes run every few seconds and would drown out real traffic
    SKIP_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in self.SKIP_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        rid = request_id_var.get("")

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
