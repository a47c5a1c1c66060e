# =============================================================================
# collegeconnect/routers/posts.py - Post Endpoints
# =============================================================================

from fastapi import APIRouter

from collegeconnect.dependencies import DatabaseDep
from collegeconnect.routers.common import (
    DESCENDING,
    PageDep,
    get_document,
    id_variants,
    list_documents,
    ok_list,
    ok_one,
)

router = APIRouter()

COLLECTION = "posts"


@router.get("")
async def list_posts(db: DatabaseDep, page: PageDep):
    """List the feed, newest first."""
    documents = await list_documents(db, COLLECTION, page, sort=("createdAt", DESCENDING))
    return ok_list(documents)


@router.get("/user/{user_id}")
async def list_user_posts(user_id: str, db: DatabaseDep, page: PageDep):
    """List posts written by one user."""
    documents = await list_documents(
        db,
        COLLECTION,
        page,
        {"user": {"$in": id_variants(user_id)}},
        sort=("createdAt", DESCENDING),
    )
    return ok_list(documents)


@router.get("/{post_id}")
async def get_post(post_id: str, db: DatabaseDep):
    return ok_one(await get_document(db, COLLECTION, post_id, resource="Post"))
