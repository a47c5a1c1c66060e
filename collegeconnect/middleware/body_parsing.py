# =============================================================================
# collegeconnect/middleware/body_parsing.py - Body Decoding
# =============================================================================
# Decodes JSON and URL-encoded request bodies before routing.
#
# The decoded value is stored on request.state.body and the raw bytes are
# replayed, so FastAPI body parameters keep working. A body that cannot be
# decoded is answered here with a 4xx error envelope; the parse error never
# reaches a route handler.
#
# Rules:
#   - application/json must be an object or an array at the top level
#   - application/x-www-form-urlencoded becomes a dict; bracketed keys nest
#     ("user[name]", "tags[]", "items[0]") and repeated keys collect into a list
#   - an empty body decodes to {}
#   - bodies over the limit are rejected with 413
# =============================================================================

import json
import logging
import re
from typing import Any
from urllib.parse import parse_qsl

from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from collegeconnect.exceptions import (
    CollegeConnectException,
    MalformedBodyError,
    PayloadTooLargeError,
    UnsupportedCharsetError,
)

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"
FORM_MEDIA_TYPE = "application/x-www-form-urlencoded"

# Nesting limits for bracketed form keys
FORM_MAX_DEPTH = 5
FORM_ARRAY_LIMIT = 20

_KEY_SEGMENT = re.compile(r"\[([^\[\]]*)\]")


def parse_content_type(header: str | None) -> tuple[str, str]:
    """
    Split a Content-Type header into (media type, charset).

    Example: "application/json; charset=UTF-8" -> ("application/json", "utf-8")
    """
    if not header:
        return "", "utf-8"
    media_type, _, params = header.partition(";")
    charset = "utf-8"
    for param in params.split(";"):
        key, _, value = param.strip().partition("=")
        if key.lower() == "charset" and value:
            charset = value.strip().strip('"').lower()
    return media_type.strip().lower(), charset


def decode_json(text: str) -> Any:
    """Parse a strict JSON body (object or array only)."""
    if not text.strip():
        return {}
    try:
        value = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedBodyError(f"Invalid JSON: {e.msg} at position {e.pos}") from e
    if not isinstance(value, (dict, list)):
        raise MalformedBodyError("JSON body must be an object or an array")
    return value


def split_form_key(key: str, depth: int = FORM_MAX_DEPTH) -> list[str]:
    """
    Split a bracketed form key into its path segments.

    Example: "user[links][]" -> ["user", "links", ""]

    Segments past `depth` are kept together as one literal key, and a key
    without a well-formed leading name is not split at all.
    """
    bracket = key.find("[")
    if bracket <= 0:
        return [key]

    segments = [key[:bracket]]
    position = bracket
    while len(segments) <= depth:
        match = _KEY_SEGMENT.match(key, position)
        if match is None:
            break
        segments.append(match.group(1))
        position = match.end()

    if len(segments) == 1:
        return [key]
    if position < len(key):
        segments.append(key[position:])
    return segments


def _combine(existing: Any, value: Any) -> list:
    if isinstance(existing, list):
        existing.append(value)
        return existing
    return [existing, value]


def _assign(target: dict, segments: list[str], value: Any) -> None:
    key, rest = segments[0], segments[1:]
    if key == "":
        # "a[]" appends: the next free index in this container
        key = str(len(target))

    if not rest:
        target[key] = _combine(target[key], value) if key in target else value
        return

    child = target.get(key)
    if isinstance(child, list) and child and isinstance(child[-1], dict):
        child = child[-1]
    elif not isinstance(child, dict):
        nested: dict = {}
        target[key] = _combine(child, nested) if key in target else nested
        child = nested
    _assign(child, rest, value)


def _finalize(value: Any) -> Any:
    """Turn containers keyed only by small indices into lists, in index order."""
    if isinstance(value, list):
        return [_finalize(item) for item in value]
    if not isinstance(value, dict):
        return value
    value = {key: _finalize(item) for key, item in value.items()}
    if value and all(key.isdigit() and int(key) <= FORM_ARRAY_LIMIT for key in value):
        return [value[key] for key in sorted(value, key=int)]
    return value


def decode_form(text: str) -> dict[str, Any]:
    """
    Parse a URL-encoded body with bracket nesting.

    Example: "user[name]=ada&tags[]=a&tags[]=b" ->
        {"user": {"name": "ada"}, "tags": ["a", "b"]}

    Repeated plain keys collect into a list. Index keys ("a[0]", "a[3]")
    become a compacted list in index order; indices above FORM_ARRAY_LIMIT
    stay object keys.
    """
    form: dict[str, Any] = {}
    for key, value in parse_qsl(text, keep_blank_values=True):
        if not key:
            continue
        _assign(form, split_form_key(key), value)
    return {key: _finalize(value) for key, value in form.items()}


_DECODERS = {
    JSON_MEDIA_TYPE: decode_json,
    FORM_MEDIA_TYPE: decode_form,
}


class BodyDecodingMiddleware:
    """Pure ASGI body decoder for JSON and form payloads."""

    def __init__(self, app: ASGIApp, limit_bytes: int = 100 * 1024, expose_details: bool = True) -> None:
        self.app = app
        self.limit_bytes = limit_bytes
        self.expose_details = expose_details

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = Headers(scope=scope)
        media_type, charset = parse_content_type(headers.get("content-type"))
        decoder = _DECODERS.get(media_type)
        if decoder is None:
            await self.app(scope, receive, send)
            return

        try:
            body = await self._read_body(headers, receive)
            scope.setdefault("state", {})["body"] = decoder(self._decode_text(body, charset))
        except CollegeConnectException as exc:
            logger.info(f"Rejected {media_type} body on {scope['path']}: {exc.error}")
            response = JSONResponse(
                status_code=exc.status_code,
                content=exc.to_dict(expose_details=self.expose_details),
            )
            await response(scope, receive, send)
            return

        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": body, "more_body": False}
            return await receive()

        await self.app(scope, replay, send)

    async def _read_body(self, headers: Headers, receive: Receive) -> bytes:
        declared = headers.get("content-length")
        if declared is not None and declared.isdigit() and int(declared) > self.limit_bytes:
            raise PayloadTooLargeError(self.limit_bytes)

        chunks = []
        size = 0
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                break
            chunk = message.get("body", b"")
            size += len(chunk)
            if size > self.limit_bytes:
                raise PayloadTooLargeError(self.limit_bytes)
            chunks.append(chunk)
            if not message.get("more_body", False):
                break
        return b"".join(chunks)

    @staticmethod
    def _decode_text(body: bytes, charset: str) -> str:
        try:
            return body.decode(charset)
        except LookupError as e:
            raise UnsupportedCharsetError(charset) from e
        except UnicodeDecodeError as e:
            raise MalformedBodyError(f"Body is not valid {charset}") from e
