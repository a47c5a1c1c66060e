# =============================================================================
# collegeconnect/middleware/errors.py - Terminal Error Stage
# =============================================================================
# Catches anything the route handlers and the app's exception handlers did
# not turn into a response, and answers with the 500 error envelope.
#
# Sits inside the CORS and access log stages, so the 500 response carries
# the CORS headers of an allow-listed origin and shows up in the access log
# with its real length. The exception is not re-raised.
# =============================================================================

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from collegeconnect.exceptions import server_error_response


class TerminalErrorMiddleware:
    """Pure ASGI catch-all for uncaught exceptions."""

    def __init__(self, app: ASGIApp, expose_details: bool = True) -> None:
        self.app = app
        self.expose_details = expose_details

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            # Headers already went out; nothing sensible can be sent
            if response_started:
                raise
            response = server_error_response(
                exc,
                scope["method"],
                scope["path"],
                expose_details=self.expose_details,
            )
            await response(scope, receive, send)
