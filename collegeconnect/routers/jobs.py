# =============================================================================
# collegeconnect/routers/jobs.py - Job Posting Endpoints
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

COLLECTION = "jobs"


@router.get("")
async def list_jobs(db: DatabaseDep, page: PageDep):
    """List job postings, newest first."""
    documents = await list_documents(db, COLLECTION, page, sort=("createdAt", DESCENDING))
    return ok_list(documents)


@router.get("/{job_id}")
async def get_job(job_id: str, db: DatabaseDep):
    return ok_one(await get_document(db, COLLECTION, job_id, resource="Job"))
