# =============================================================================
# collegeconnect/routers/messages.py - Direct Message Endpoints
# =============================================================================
# Message documents carry `sender` and `receiver` user references.
# Live delivery goes through the realtime channel; these endpoints only read
# stored history.
# =============================================================================

from fastapi import APIRouter

from collegeconnect.dependencies import DatabaseDep
from collegeconnect.routers.common import (
    ASCENDING,
    DESCENDING,
    PageDep,
    id_variants,
    list_documents,
    ok_list,
)

router = APIRouter()

COLLECTION = "messages"


@router.get("/conversation/{user_id}/{other_id}")
async def get_conversation(user_id: str, other_id: str, db: DatabaseDep, page: PageDep):
    """
    Messages exchanged between two users, oldest first.

    Both directions are included.
    """
    user, other = id_variants(user_id), id_variants(other_id)
    query = {
        "$or": [
            {"sender": {"$in": user}, "receiver": {"$in": other}},
            {"sender": {"$in": other}, "receiver": {"$in": user}},
        ]
    }
    documents = await list_documents(db, COLLECTION, page, query, sort=("createdAt", ASCENDING))
    return ok_list(documents)


@router.get("/inbox/{user_id}")
async def get_inbox(user_id: str, db: DatabaseDep, page: PageDep):
    """Messages received by a user, newest first."""
    documents = await list_documents(
        db,
        COLLECTION,
        page,
        {"receiver": {"$in": id_variants(user_id)}},
        sort=("createdAt", DESCENDING),
    )
    return ok_list(documents)
