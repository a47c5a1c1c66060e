# =============================================================================
# collegeconnect/routers/follows.py - Follow Relationship Endpoints
# =============================================================================
# Mounted at /api/users after the users group. Every path here has a shape
# the users group does not serve (checked at startup by routing.py).
#
# Follow documents: {"follower": <user>, "following": <user>, "createdAt": ...}
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

COLLECTION = "follows"


@router.get("/{user_id}/followers")
async def list_followers(user_id: str, db: DatabaseDep, page: PageDep):
    """Follow records where the user is being followed."""
    documents = await list_documents(
        db,
        COLLECTION,
        page,
        {"following": {"$in": id_variants(user_id)}},
        sort=("createdAt", DESCENDING),
    )
    return ok_list(documents)


@router.get("/{user_id}/following")
async def list_following(user_id: str, db: DatabaseDep, page: PageDep):
    """Follow records where the user is the follower."""
    documents = await list_documents(
        db,
        COLLECTION,
        page,
        {"follower": {"$in": id_variants(user_id)}},
        sort=("createdAt", DESCENDING),
    )
    return ok_list(documents)


@router.get("/follow/status/{follower_id}/{followee_id}")
async def follow_status(follower_id: str, followee_id: str, db: DatabaseDep):
    """Whether follower_id currently follows followee_id."""
    document = await db[COLLECTION].find_one(
        {
            "follower": {"$in": id_variants(follower_id)},
            "following": {"$in": id_variants(followee_id)},
        },
        {"_id": 1},
    )
    return {"success": True, "following": document is not None}
