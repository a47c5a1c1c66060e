# =============================================================================
# collegeconnect/middleware/cors.py - Cross-Origin Policy
# =============================================================================
# Starlette's CORSMiddleware with one change: every OPTIONS request is a
# pre-flight. It is answered here with 204 and an empty body, on any path,
# whether or not a route exists. CORS headers are only attached for
# allow-listed origins.
# =============================================================================

from typing import Sequence

from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp, Receive, Scope, Send

DEFAULT_ALLOW_METHODS = ("GET", "POST", "PUT", "DELETE", "OPTIONS")
DEFAULT_ALLOW_HEADERS = ("Content-Type", "Authorization", "X-Requested-With")


class PreflightCORSMiddleware(CORSMiddleware):
    """
    Allow-list CORS with an unconditional pre-flight short-circuit.

    Simple requests are handled by the parent class: a non-listed origin gets
    no Access-Control-Allow-Origin header, the request itself still runs.
    """

    def __init__(
        self,
        app: ASGIApp,
        allow_origins: Sequence[str] = (),
        allow_methods: Sequence[str] = DEFAULT_ALLOW_METHODS,
        allow_headers: Sequence[str] = DEFAULT_ALLOW_HEADERS,
        allow_credentials: bool = True,
        max_age: int = 600,
    ) -> None:
        super().__init__(
            app,
            allow_origins=allow_origins,
            allow_methods=allow_methods,
            allow_headers=allow_headers,
            allow_credentials=allow_credentials,
            max_age=max_age,
        )
        self._preflight_allow = {
            "Access-Control-Allow-Methods": ", ".join(allow_methods),
            "Access-Control-Allow-Headers": ", ".join(allow_headers),
            "Access-Control-Max-Age": str(max_age),
        }
        if allow_credentials:
            self._preflight_allow["Access-Control-Allow-Credentials"] = "true"

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["method"] == "OPTIONS":
            response = self.preflight_response(request_headers=Headers(scope=scope))
            await response(scope, receive, send)
            return
        await super().__call__(scope, receive, send)

    def preflight_response(self, request_headers: Headers) -> Response:
        headers = {"Vary": "Origin"}
        origin = request_headers.get("origin")
        if origin is not None and self.is_allowed_origin(origin=origin):
            headers.update(self._preflight_allow)
            headers["Access-Control-Allow-Origin"] = origin
        return Response(status_code=204, headers=headers)
