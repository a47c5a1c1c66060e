# =============================================================================
# collegeconnect/middleware/request_logging.py - Access Log
# =============================================================================
# One line per request on the "collegeconnect.access" logger:
#
#   GET /api/posts 200 4.213 ms - 1532
#
# Bodies pass through untouched; only the response start message is read.
# =============================================================================

import logging
import time

from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger("collegeconnect.access")


class RequestLoggingMiddleware:
    """Pure ASGI access logger."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        status_code = 500
        length = "-"

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code, length
            if message["type"] == "http.response.start":
                status_code = message["status"]
                length = Headers(raw=message.get("headers", [])).get("content-length", "-")
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            duration_ms = (time.perf_counter() - start) * 1000
            path = scope["path"]
            if scope.get("query_string"):
                path = f"{path}?{scope['query_string'].decode('latin-1')}"
            logger.info(f"{scope['method']} {path} {status_code} {duration_ms:.3f} ms - {length}")
