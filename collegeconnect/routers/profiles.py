# =============================================================================
# collegeconnect/routers/profiles.py - Profile Endpoints
# =============================================================================

from fastapi import APIRouter

from collegeconnect.dependencies import DatabaseDep
from collegeconnect.exceptions import DocumentNotFoundError
from collegeconnect.routers.common import PageDep, id_variants, list_documents, ok_list, ok_one

router = APIRouter()

COLLECTION = "profiles"


@router.get("")
async def list_profiles(db: DatabaseDep, page: PageDep):
    """List profiles."""
    return ok_list(await list_documents(db, COLLECTION, page))


@router.get("/{user_id}")
async def get_profile(user_id: str, db: DatabaseDep):
    """Get the profile belonging to a user."""
    document = await db[COLLECTION].find_one({"user": {"$in": id_variants(user_id)}})
    if document is None:
        raise DocumentNotFoundError("Profile", user_id)
    return ok_one(document)
