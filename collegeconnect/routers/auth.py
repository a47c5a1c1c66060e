# =============================================================================
# collegeconnect/routers/auth.py - Account Lookup Endpoints
# =============================================================================
# Read-only account checks used by the signup and login forms.
# Credential handling is not done here.
# =============================================================================

from fastapi import APIRouter, Query

from collegeconnect.dependencies import DatabaseDep

router = APIRouter()

COLLECTION = "users"


@router.get("/exists")
async def account_exists(
    db: DatabaseDep,
    email: str = Query(..., min_length=3, description="Email address to look up"),
):
    """
    Check whether an account is registered for an email address.

    The comparison is case-insensitive; emails are stored lower-cased.
    """
    document = await db[COLLECTION].find_one({"email": email.strip().lower()}, {"_id": 1})
    return {"success": True, "exists": document is not None}
