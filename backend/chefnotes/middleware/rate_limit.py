"""
ChefNotes Backend — Conversion Rate Limiting Middleware
=========================================================

What:  Per-IP sliding window limit on convert-to-recipe requests.
Why:   Each conversion is a paid/quota-limited Gemini call. Recipe and note
       CRUD only touches memory and is left unlimited.
How:   Keeps a list of recent conversion timestamps per client IP; requests
       beyond rate_limit_requests within rate_limit_window get a 429.

Algorithm: Sliding Window Counter
    1. Drop timestamps older than the window for this IP
    2. If the remaining count is at the limit, reject with Retry-After
    3. Otherwise record now and let the request through

    State is in-process, matching the single-process deployment model.
"""

import logging
import time
from collections import defaultdict
from typing import Dict, List

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from chefnotes.config import settings
from chefnotes.exceptions import RateLimitExceededError
from chefnotes.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)

CONVERSION_PATH_SUFFIX = "/convert-to-recipe"


class ConversionRateLimitMiddleware(BaseHTTPMiddleware):
    """
    In-memory sliding window limiter for recipe conversions.

    Configuration (from settings):
        rate_limit_requests: Max conversions per window (default: 30)
        rate_limit_window: Window duration in seconds (default: 3600)
    """

    def __init__(self, app, **kwargs):
        super().__init__(app, **kwargs)
        self._requests: Dict[str, List[float]] = defaultdict(list)

    @staticmethod
    def is_conversion(request: Request) -> bool:
        return request.method == "POST" and request.url.path.endswith(CONVERSION_PATH_SUFFIX)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not self.is_conversion(request):
            return await call_next(request)

        client_ip = (
            getattr(request.client, "host", "unknown")
            if request.client
            else "unknown"
        )

        now = time.time()
        window_start = now - settings.rate_limit_window

        recent = [ts for ts in self._requests[client_ip] if ts > window_start]
        self._requests[client_ip] = recent

        if len(recent) >= settings.rate_limit_requests:
            retry_after = int(recent[0] + settings.rate_limit_window - now) + 1
            logger.warning(
                "Conversion rate limit exceeded for IP %s: %d requests in %ds window",
                client_ip,
                len(recent),
                settings.rate_limit_window,
            )
            exc = RateLimitExceededError(retry_after=retry_after)
            return JSONResponse(
                status_code=429,
                content={
                    "error": "rate_limit_exceeded",
                    "message": exc.message,
                    "details": exc.context,
                    "request_id": request_id_var.get(""),
                },
                headers={"Retry-After": str(retry_after)},
            )

        recent.append(now)
        self._cleanup_inactive_ips(window_start)

        return await call_next(request)

    def _cleanup_inactive_ips(self, window_start: float) -> None:
        """Forget IPs with no conversions inside the current window."""
        inactive_ips = [
            ip for ip, timestamps in self._requests.items()
            if not timestamps or timestamps[-1] <= window_start
        ]
        for ip in inactive_ips:
            del self._requests[ip]

        if inactive_ips:
            logger.debug("Cleaned up %d inactive IP entries", len(inactive_ips))
