# jobify/api/v1/jobs.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from jobify.api.v1.auth import get_current_user, is_owner_or_admin, require_roles
from jobify.api.v1.schemas import (
    JobCreate,
    JobOut,
    JobStatsOut,
    JobStatusCounts,
    JobTypeCounts,
    JobUpdate,
    MessageOut,
)
from jobify.core.errors import AuthError, NotFoundError
from jobify.db.documents import Job, Role, User
from jobify.repositories import jobs as jobs_repo
from jobify.repositories.applications import count_by_job
from jobify.repositories.users import user_summaries

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/jobs", tags=["jobs"])

JOB_NOT_FOUND = "Job not found"


async def _with_creators(jobs: List[Job]) -> List[JobOut]:
    creators = await user_summaries((j.created_by for j in jobs), "name", "company")
    return [JobOut.from_document(j, creators.get(j.created_by)) for j in jobs]


async def _owned_job(job_id: str, user: User) -> Job:
    job = await jobs_repo.get_job(job_id)
    if job is None:
        raise NotFoundError(JOB_NOT_FOUND)
    if not is_owner_or_admin(user, job.created_by):
        raise AuthError("User not authorized")
    return job


@router.post("", response_model=JobOut)
async def create_job(
    payload: JobCreate,
    current_user: User = Depends(require_roles(Role.RECRUITER, Role.ADMIN)),
):
    job = await jobs_repo.create_job(current_user.id, **payload.model_dump())
    return JobOut.from_document(job)


@router.get("", response_model=List[JobOut])
async def list_jobs(
    search: Optional[str] = Query(None),
    location: Optional[str] = Query(None),
    job_type: Optional[str] = Query(None, alias="jobType"),
    status: Optional[str] = Query(None),
):
    jobs = await jobs_repo.list_jobs(
        search=search, location=location, job_type=job_type, status=status
    )
    return await _with_creators(jobs)


@router.get("/recruiter/myjobs", response_model=List[JobOut])
async def recruiter_jobs(current_user: User = Depends(require_roles(Role.RECRUITER, Role.ADMIN))):
    jobs = await jobs_repo.list_jobs_by_creator(current_user.id)
    return [JobOut.from_document(j) for j in jobs]


@router.get("/admin/stats", response_model=JobStatsOut)
async def job_stats(current_user: User = Depends(require_roles(Role.ADMIN))):
    stats = await jobs_repo.job_stats()
    return JobStatsOut(
        total_jobs=stats["total"],
        by_status=JobStatusCounts(**stats["by_status"]),
        by_job_type=JobTypeCounts(**stats["by_job_type"]),
        recent_jobs=[JobOut.from_document(j) for j in stats["recent"]],
    )


@router.get("/{job_id}", response_model=JobOut)
async def get_job(job_id: str):
    job = await jobs_repo.get_job(job_id)
    if job is None:
        raise NotFoundError(JOB_NOT_FOUND)
    (out,) = await _with_creators([job])
    return out


@router.put("/{job_id}", response_model=JobOut)
async def update_job(
    job_id: str, payload: JobUpdate, current_user: User = Depends(get_current_user)
):
    job = await _owned_job(job_id, current_user)
    job = await jobs_repo.update_job(job, payload.changes())
    return JobOut.from_document(job)


@router.delete("/{job_id}", response_model=MessageOut)
async def delete_job(job_id: str, current_user: User = Depends(get_current_user)):
    job = await _owned_job(job_id, current_user)
    retained = await count_by_job(job.id)
    await jobs_repo.delete_job(job)
    if retained:
        logger.info("Kept %d application(s) of deleted job %s", retained, job_id)
    return {"msg": "Job removed"}
