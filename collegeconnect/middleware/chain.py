# =============================================================================
# collegeconnect/middleware/chain.py - Middleware Order
# =============================================================================
# The request pipeline as one ordered list, outermost first:
#
#   1. CORS            - pre-flight short-circuit, allow-list headers
#   2. Request logging - access log line per request
#   3. Terminal errors - 500 envelope for anything uncaught
#   4. Body decoding   - JSON / form bodies, 4xx on malformed input
#   5. Static assets   - fall-through file serving
#   -> FastAPI routing (fallback endpoints, then the route table)
#
# Pre-flight requests never reach the logger or the body decoder.
# =============================================================================

from starlette.middleware import Middleware

from collegeconnect.middleware.body_parsing import BodyDecodingMiddleware
from collegeconnect.middleware.cors import PreflightCORSMiddleware
from collegeconnect.middleware.errors import TerminalErrorMiddleware
from collegeconnect.middleware.request_logging import RequestLoggingMiddleware
from collegeconnect.middleware.static_assets import StaticAssetMiddleware, StaticMount


def build_middleware_chain(settings) -> list[Middleware]:
    """
    Build the middleware list for FastAPI(middleware=...).

    Starlette applies the list in order, so index 0 sees the request first.
    """
    return [
        Middleware(
            PreflightCORSMiddleware,
            allow_origins=settings.cors_origins_list,
            allow_credentials=True,
        ),
        Middleware(RequestLoggingMiddleware),
        Middleware(TerminalErrorMiddleware, expose_details=settings.expose_error_details),
        Middleware(
            BodyDecodingMiddleware,
            limit_bytes=settings.BODY_LIMIT_BYTES,
            expose_details=settings.expose_error_details,
        ),
        Middleware(
            StaticAssetMiddleware,
            mounts=[StaticMount(prefix, directory) for prefix, directory in settings.static_mounts],
        ),
    ]
