# =============================================================================
# collegeconnect/routers/event_recommendations.py - Event Recommendations
# =============================================================================
# Recommendations are precomputed per user and stored in the
# "eventrecommendations" collection: {"user": ..., "event": ..., "score": ...}.
# =============================================================================

from fastapi import APIRouter

from collegeconnect.dependencies import DatabaseDep
from collegeconnect.routers.common import (
    DESCENDING,
    PageDep,
    id_variants,
    list_documents,
    ok_list,
)

router = APIRouter()

COLLECTION = "eventrecommendations"


@router.get("/{user_id}")
async def get_recommendations(user_id: str, db: DatabaseDep, page: PageDep):
    """Recommended events for a user, best match first."""
    documents = await list_documents(
        db,
        COLLECTION,
        page,
        {"user": {"$in": id_variants(user_id)}},
        sort=("score", DESCENDING),
    )
    return ok_list(documents)
