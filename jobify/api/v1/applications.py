# jobify/api/v1/applications.py
import logging
from typing import List

from fastapi import APIRouter, Depends
from pymongo.errors import PyMongoError

from jobify.api.v1.auth import get_current_user, is_owner_or_admin, require_roles
from jobify.api.v1.schemas import (
    ApplicationCreate,
    ApplicationOut,
    ApplicationStatsOut,
    ApplicationStatusCounts,
    ApplicationStatusUpdate,
)
from jobify.core.errors import AuthError, ConflictError, InternalError, NotFoundError
from jobify.db.documents import ApplicationStatus, JobStatus, Role, User
from jobify.repositories import applications as apps_repo
from jobify.repositories import jobs as jobs_repo
from jobify.repositories.users import user_summaries
from jobify.repositories.utils import summary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/applications", tags=["applications"])


@router.post("", response_model=ApplicationOut)
async def apply(payload: ApplicationCreate, current_user: User = Depends(get_current_user)):
    job = await jobs_repo.get_job(payload.job)
    if job is None:
        raise NotFoundError("Job not found")
    if job.status != JobStatus.OPEN:
        raise ConflictError("This job is no longer accepting applications")
    application = await apps_repo.create_application(
        job.id, current_user.id, payload.cover_letter, payload.resume
    )
    return ApplicationOut.from_document(
        application,
        job=summary(job, ("title", "company")),
        applicant=summary(current_user, ("name", "email")),
    )


@router.get("/me", response_model=List[ApplicationOut])
async def my_applications(current_user: User = Depends(get_current_user)):
    applications = await apps_repo.list_by_applicant(current_user.id)
    jobs = await jobs_repo.job_summaries(
        (a.job for a in applications), "title", "company", "location", "status"
    )
    return [ApplicationOut.from_document(a, job=jobs.get(a.job)) for a in applications]


@router.get("/job/{job_id}", response_model=List[ApplicationOut])
async def job_applications(job_id: str, current_user: User = Depends(get_current_user)):
    job = await jobs_repo.get_job(job_id)
    if job is None:
        raise NotFoundError("Job not found")
    if not is_owner_or_admin(current_user, job.created_by):
        raise AuthError("Not authorized")
    applications = await apps_repo.list_by_job(job.id)
    applicants = await user_summaries(
        (a.applicant for a in applications), "name", "email", "skills"
    )
    return [
        ApplicationOut.from_document(a, applicant=applicants.get(a.applicant))
        for a in applications
    ]


@router.get("/admin/stats", response_model=ApplicationStatsOut)
async def application_stats(current_user: User = Depends(require_roles(Role.ADMIN))):
    stats = await apps_repo.application_stats()
    recent = stats["recent"]
    applicants = await user_summaries((a.applicant for a in recent), "name")
    jobs = await jobs_repo.job_summaries((a.job for a in recent), "title", "company")
    return ApplicationStatsOut(
        total_applications=stats["total"],
        by_status=ApplicationStatusCounts(**stats["by_status"]),
        recent_applications=[
            ApplicationOut.from_document(
                a, job=jobs.get(a.job), applicant=applicants.get(a.applicant)
            )
            for a in recent
        ],
    )


@router.put("/{application_id}", response_model=ApplicationOut)
async def update_application_status(
    application_id: str,
    payload: ApplicationStatusUpdate,
    current_user: User = Depends(get_current_user),
):
    application = await apps_repo.get_application(application_id)
    if application is None:
        raise NotFoundError("Application not found")
    job = await jobs_repo.get_job(application.job)
    # an application whose job was deleted can only be managed by an admin
    owner_id = job.created_by if job is not None else None
    if not is_owner_or_admin(current_user, owner_id):
        raise AuthError("Not authorized")

    application = await apps_repo.update_status(
        application, payload.status, payload.feedback or ""
    )
    if payload.status == ApplicationStatus.HIRED and job is not None:
        # second, independent write; the application stays hired if this fails
        try:
            job = await jobs_repo.close_job(job)
        except PyMongoError as exc:
            logger.exception(
                "Application %s is hired but job %s could not be closed", application.id, job.id
            )
            raise InternalError() from exc
    return ApplicationOut.from_document(
        application, job=summary(job, ("title", "company", "status"))
    )
