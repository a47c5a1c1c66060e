# =============================================================================
# collegeconnect/routers/common.py - Shared Route Helpers
# =============================================================================
# Query and serialization helpers used by every route group.
#
# Response shapes:
#   list:   {"success": true, "count": 2, "data": [{...}, {...}]}
#   single: {"success": true, "data": {...}}
# =============================================================================

from dataclasses import dataclass
from datetime import datetime
from typing import Annotated, Any

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import Depends, Query

from collegeconnect.exceptions import DocumentNotFoundError, InvalidObjectIdError

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

ASCENDING = 1
DESCENDING = -1


# =============================================================================
# Pagination
# =============================================================================

@dataclass(frozen=True)
class Page:
    skip: int
    limit: int


def pagination(
    skip: int = Query(0, ge=0, description="Number of documents to skip"),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Page size"),
) -> Page:
    return Page(skip=skip, limit=limit)


PageDep = Annotated[Page, Depends(pagination)]


# =============================================================================
# Ids
# =============================================================================

def object_id(value: str) -> ObjectId:
    """
    Parse a path id.

    Raises:
        InvalidObjectIdError: If value is not a 24-char hex ObjectId
    """
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as e:
        raise InvalidObjectIdError(value) from e


def id_variants(value: str) -> list[Any]:
    """
    Match values for a reference field that may be stored as ObjectId or string.

    Example: "65a0..." -> ["65a0...", ObjectId("65a0...")]
    """
    variants: list[Any] = [value]
    if ObjectId.is_valid(value):
        variants.append(ObjectId(value))
    return variants


# =============================================================================
# Serialization
# =============================================================================

def serialize_document(value: Any) -> Any:
    """Make a BSON document JSON-safe (ObjectId -> str, datetime -> ISO-8601)."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: serialize_document(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_document(item) for item in value]
    return value


def ok_list(documents: list[dict]) -> dict[str, Any]:
    data = serialize_document(documents)
    return {"success": True, "count": len(data), "data": data}


def ok_one(document: dict) -> dict[str, Any]:
    return {"success": True, "data": serialize_document(document)}


# =============================================================================
# Queries
# =============================================================================

async def list_documents(
    db,
    collection: str,
    page: Page,
    query: dict | None = None,
    *,
    sort: tuple[str, int] | None = None,
    projection: dict | None = None,
) -> list[dict]:
    """Fetch one page of documents from a collection."""
    cursor = db[collection].find(query or {}, projection)
    if sort is not None:
        cursor = cursor.sort(*sort)
    cursor = cursor.skip(page.skip).limit(page.limit)
    return await cursor.to_list(length=page.limit)


async def get_document(
    db,
    collection: str,
    document_id: str,
    *,
    resource: str,
    projection: dict | None = None,
) -> dict:
    """
    Fetch a document by _id.

    Raises:
        InvalidObjectIdError: If document_id is malformed
        DocumentNotFoundError: If no document has that id
    """
    document = await db[collection].find_one({"_id": object_id(document_id)}, projection)
    if document is None:
        raise DocumentNotFoundError(resource, document_id)
    return document
