# jobify/repositories/applications.py
import logging
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from jobify.core.errors import ConflictError
from jobify.db.documents import Application, ApplicationStatus
from jobify.repositories.utils import parse_object_id

logger = logging.getLogger(__name__)

ALREADY_APPLIED_MSG = "You have already applied for this job"
RECENT_LIMIT = 5


async def find_application(job_id: ObjectId, applicant_id: ObjectId) -> Optional[Application]:
    return await Application.find_one({"job": job_id, "applicant": applicant_id})


async def create_application(
    job_id: ObjectId, applicant_id: ObjectId, cover_letter: str, resume: Optional[str] = None
) -> Application:
    # pre-check only gives a friendly message; the unique index decides races
    if await find_application(job_id, applicant_id):
        raise ConflictError(ALREADY_APPLIED_MSG)
    application = Application(
        job=job_id,
        applicant=applicant_id,
        cover_letter=cover_letter,
        resume=resume or "",
    )
    try:
        await application.insert()
    except DuplicateKeyError as exc:
        raise ConflictError(ALREADY_APPLIED_MSG) from exc
    logger.info("Application %s: user %s applied to job %s", application.id, applicant_id, job_id)
    return application


async def get_application(application_id: Any) -> Optional[Application]:
    oid = parse_object_id(application_id)
    if oid is None:
        return None
    return await Application.get(oid)


async def list_by_applicant(applicant_id: ObjectId) -> List[Application]:
    return await Application.find({"applicant": applicant_id}).sort("-created_at", "-_id").to_list()


async def list_by_job(job_id: ObjectId) -> List[Application]:
    return await Application.find({"job": job_id}).sort("-created_at", "-_id").to_list()


async def count_by_job(job_id: ObjectId) -> int:
    return await Application.find({"job": job_id}).count()


async def update_status(
    application: Application, status: ApplicationStatus, feedback: str = ""
) -> Application:
    previous = application.status
    await application.set({"status": status, "feedback": feedback})
    logger.info(
        "Application %s status %s -> %s", application.id, previous.value, status.value
    )
    return application


async def application_stats() -> Dict[str, Any]:
    by_status = {}
    for status in (
        ApplicationStatus.PENDING,
        ApplicationStatus.SHORTLISTED,
        ApplicationStatus.REJECTED,
        ApplicationStatus.INTERVIEWED,
        ApplicationStatus.HIRED,
    ):
        by_status[status.value] = await Application.find({"status": status.value}).count()
    return {
        "total": await Application.find_all().count(),
        "by_status": by_status,
        "recent": await Application.find_all()
        .sort("-created_at", "-_id")
        .limit(RECENT_LIMIT)
        .to_list(),
    }
