# =============================================================================
# collegeconnect/routers/events.py - Event Endpoints
# =============================================================================

from fastapi import APIRouter

from collegeconnect.dependencies import DatabaseDep
from collegeconnect.routers.common import (
    ASCENDING,
    PageDep,
    get_document,
    list_documents,
    ok_list,
    ok_one,
)

router = APIRouter()

COLLECTION = "events"


@router.get("")
async def list_events(db: DatabaseDep, page: PageDep):
    """List events in date order."""
    documents = await list_documents(db, COLLECTION, page, sort=("date", ASCENDING))
    return ok_list(documents)


@router.get("/{event_id}")
async def get_event(event_id: str, db: DatabaseDep):
    """Get one event."""
    return ok_one(await get_document(db, COLLECTION, event_id, resource="Event"))
