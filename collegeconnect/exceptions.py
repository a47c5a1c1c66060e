# =============================================================================
# collegeconnect/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error response is a JSON envelope with a `success: false` flag:
#
#   {"success": false, "message": "...", "error": "..."}
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

# Shown instead of the exception text when details must not leak
GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


def error_envelope(message: str, error: str | None = None, **extra: Any) -> dict[str, Any]:
    """Build the uniform error body."""
    content: dict[str, Any] = {"success": False, "message": message}
    if error is not None:
        content["error"] = error
    content.update(extra)
    return content


class CollegeConnectException(Exception):
    """
    Base exception for the CollegeConnect API.

    Subclasses fix the status code; the handler renders them with
    error_envelope().
    """

    status_code = 500

    def __init__(self, message: str, error: str | None = None):
        super().__init__(message)
        self.message = message
        self.error = error

    def to_dict(self, expose_details: bool = True) -> dict[str, Any]:
        """Convert exception to API response dict."""
        if self.error is None:
            return error_envelope(self.message)
        return error_envelope(self.message, self.error if expose_details else GENERIC_ERROR_MESSAGE)


# =============================================================================
# Request Body Exceptions
# =============================================================================

class MalformedBodyError(CollegeConnectException):
    """Raised when a JSON or form body cannot be decoded."""

    status_code = 400

    def __init__(self, error: str):
        super().__init__("Malformed request body", error)


class PayloadTooLargeError(CollegeConnectException):
    """Raised when a body exceeds the configured limit."""

    status_code = 413

    def __init__(self, limit: int):
        super().__init__("Request body too large", f"Body exceeds {limit} bytes")
        self.limit = limit


class UnsupportedCharsetError(CollegeConnectException):
    """Raised when a body declares a charset Python cannot decode."""

    status_code = 415

    def __init__(self, charset: str):
        super().__init__("Unsupported charset", f'Unsupported charset "{charset.upper()}"')
        self.charset = charset


# =============================================================================
# Database Exceptions
# =============================================================================

class DatabaseUnavailableError(CollegeConnectException):
    """Raised when a handler needs the database and it is not connected."""

    status_code = 503

    def __init__(self, state: str):
        super().__init__("Database unavailable", f"Database connection state: {state}")
        self.state = state


class InvalidObjectIdError(CollegeConnectException):
    """Raised when a path id is not a valid ObjectId."""

    status_code = 400

    def __init__(self, value: str):
        super().__init__("Invalid id", f"'{value}' is not a valid ObjectId")
        self.value = value


class DocumentNotFoundError(CollegeConnectException):
    """Raised when a document lookup finds nothing."""

    status_code = 404

    def __init__(self, resource: str, document_id: str):
        super().__init__(f"{resource} not found", f"No {resource.lower()} with id {document_id}")
        self.resource = resource
        self.document_id = document_id


# =============================================================================
# Startup Exceptions
# =============================================================================

class RouteConflictError(Exception):
    """Raised when two route groups declare the same method and path shape."""

    def __init__(self, method: str, shape: str, first: str, second: str):
        super().__init__(
            f"{method} {shape} is declared by route group '{first}' "
            f"and again by '{second}'"
        )
        self.method = method
        self.shape = shape
        self.first = first
        self.second = second


# =============================================================================
# Exception Handlers
# =============================================================================

def _expose_details(request: Request) -> bool:
    settings = getattr(request.app.state, "settings", None)
    return True if settings is None else settings.expose_error_details


async def collegeconnect_exception_handler(
    request: Request,
    exc: CollegeConnectException
) -> JSONResponse:
    """Render a CollegeConnectException with its own status code."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(expose_details=_expose_details(request))
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """Wrap framework HTTP errors (404, 405, ...) in the error envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Handle query/path/body validation errors."""
    return JSONResponse(
        status_code=422,
        content=error_envelope(
            "Validation error",
            errors=[
                {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
                for err in exc.errors()
            ],
        )
    )


def server_error_response(
    exc: Exception,
    method: str,
    path: str,
    expose_details: bool = True,
) -> JSONResponse:
    """
    Terminal error response.

    Logs the traceback and answers 500. The exception text is only sent to
    the client outside production. Used by TerminalErrorMiddleware, which
    runs inside the CORS and access log stages.
    """
    logger.exception(f"Unhandled error on {method} {path}: {exc}")
    detail = str(exc) if expose_details else GENERIC_ERROR_MESSAGE
    return JSONResponse(
        status_code=500,
        content=error_envelope("Server error", detail)
    )
