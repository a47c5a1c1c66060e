# =============================================================================
# collegeconnect/routers/achievements.py - Achievement Endpoints
# =============================================================================
# Route order matters: /user/{user_id} is declared before /{achievement_id}.
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

COLLECTION = "achievements"


@router.get("")
async def list_achievements(db: DatabaseDep, page: PageDep):
    """List achievements, newest first."""
    documents = await list_documents(db, COLLECTION, page, sort=("createdAt", DESCENDING))
    return ok_list(documents)


@router.get("/user/{user_id}")
async def list_user_achievements(user_id: str, db: DatabaseDep, page: PageDep):
    """List the achievements posted by one user."""
    documents = await list_documents(
        db,
        COLLECTION,
        page,
        {"user": {"$in": id_variants(user_id)}},
        sort=("createdAt", DESCENDING),
    )
    return ok_list(documents)


@router.get("/{achievement_id}")
async def get_achievement(achievement_id: str, db: DatabaseDep):
    return ok_one(await get_document(db, COLLECTION, achievement_id, resource="Achievement"))
