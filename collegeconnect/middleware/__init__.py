# =============================================================================
# collegeconnect/middleware/ - Request Pipeline
# =============================================================================
# Cross-cutting ASGI middleware applied to every HTTP request before routing.
# See chain.py for the order.
# =============================================================================

from collegeconnect.middleware.body_parsing import BodyDecodingMiddleware
from collegeconnect.middleware.chain import build_middleware_chain
from collegeconnect.middleware.cors import PreflightCORSMiddleware
from collegeconnect.middleware.errors import TerminalErrorMiddleware
from collegeconnect.middleware.request_logging import RequestLoggingMiddleware
from collegeconnect.middleware.static_assets import StaticAssetMiddleware, StaticMount

__all__ = [
    "BodyDecodingMiddleware",
    "PreflightCORSMiddleware",
    "RequestLoggingMiddleware",
    "StaticAssetMiddleware",
    "StaticMount",
    "TerminalErrorMiddleware",
    "build_middleware_chain",
]
