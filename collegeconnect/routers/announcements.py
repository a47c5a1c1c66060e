# =============================================================================
# collegeconnect/routers/announcements.py - Announcement Endpoints
# =============================================================================

from fastapi import APIRouter

from collegeconnect.dependencies import DatabaseDep
from collegeconnect.routers.common import (
    DESCENDING,
    PageDep,
    get_document,
    list_documents,
    ok_list,
    ok_one,
)

router = APIRouter()

COLLECTION = "announcements"


@router.get("")
async def list_announcements(db: DatabaseDep, page: PageDep):
    """List announcements, newest first."""
    documents = await list_documents(db, COLLECTION, page, sort=("createdAt", DESCENDING))
    return ok_list(documents)


@router.get("/{announcement_id}")
async def get_announcement(announcement_id: str, db: DatabaseDep):
    return ok_one(await get_document(db, COLLECTION, announcement_id, resource="Announcement"))
