# =============================================================================
# collegeconnect/routers/users.py - User Directory Endpoints
# =============================================================================
# Shares the /api/users prefix with follows.py, which is mounted after this
# group. Paths here are /api/users and /api/users/{user_id}.
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

COLLECTION = "users"

# Never send password hashes to clients
PUBLIC_PROJECTION = {"password": 0}


@router.get("")
async def list_users(db: DatabaseDep, page: PageDep):
    """List users, most recently joined first."""
    documents = await list_documents(
        db,
        COLLECTION,
        page,
        sort=("createdAt", DESCENDING),
        projection=PUBLIC_PROJECTION,
    )
    return ok_list(documents)


@router.get("/{user_id}")
async def get_user(user_id: str, db: DatabaseDep):
    """Get one user's public record."""
    document = await get_document(
        db, COLLECTION, user_id, resource="User", projection=PUBLIC_PROJECTION
    )
    return ok_one(document)
