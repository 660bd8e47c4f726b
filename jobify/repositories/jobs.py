# jobify/repositories/jobs.py
import logging
import re
from typing import Any, Dict, Iterable, List, Optional

from bson import ObjectId

from jobify.db.documents import Job, JobStatus, JobType
from jobify.repositories.utils import parse_object_id, summaries

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5
# "all" disables the location and jobType filters
ANY = "all"


def _contains(text: str) -> Dict[str, str]:
    # case-insensitive substring match on literal user input
    return {"$regex": re.escape(text), "$options": "i"}


def build_job_query(
    search: Optional[str] = None,
    location: Optional[str] = None,
    job_type: Optional[str] = None,
    status: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Translate the public listing filters into a Mongo query.

    status defaults to open only; status=all lists every job.
    """
    query: Dict[str, Any] = {}
    if status and status != ANY:
        query["status"] = status
    elif not status:
        query["status"] = JobStatus.OPEN.value
    if location and location != ANY:
        query["location"] = _contains(location)
    if job_type and job_type != ANY:
        query["job_type"] = job_type
    if search:
        query["$or"] = [
            {"title": _contains(search)},
            {"company": _contains(search)},
            {"description": _contains(search)},
        ]
    return query


async def create_job(created_by: ObjectId, **fields: Any) -> Job:
    job = Job(created_by=created_by, **fields)
    await job.insert()
    logger.info("Job %s created by %s", job.id, created_by)
    return job


async def get_job(job_id: Any) -> Optional[Job]:
    oid = parse_object_id(job_id)
    if oid is None:
        return None
    return await Job.get(oid)


async def list_jobs(**filters: Optional[str]) -> List[Job]:
    query = build_job_query(**filters)
    return await Job.find(query).sort("-created_at", "-_id").to_list()


async def list_jobs_by_creator(user_id: ObjectId) -> List[Job]:
    return await Job.find({"created_by": user_id}).sort("-created_at", "-_id").to_list()


async def update_job(job: Job, fields: Dict[str, Any]) -> Job:
    if fields:
        await job.set(fields)
        logger.info("Job %s updated: %s", job.id, sorted(fields))
    return job


async def close_job(job: Job) -> Job:
    if job.status != JobStatus.CLOSED:
        await job.set({"status": JobStatus.CLOSED})
        logger.info("Job %s closed", job.id)
    return job


async def delete_job(job: Job) -> None:
    # applications for the job are kept as a historical record
    await job.delete()
    logger.info("Job %s removed", job.id)


async def job_stats() -> Dict[str, Any]:
    by_type = {}
    for key, job_type in (
        ("fullTime", JobType.FULL_TIME),
        ("partTime", JobType.PART_TIME),
        ("contract", JobType.CONTRACT),
        ("internship", JobType.INTERNSHIP),
        ("remote", JobType.REMOTE),
    ):
        by_type[key] = await Job.find({"job_type": job_type.value}).count()
    return {
        "total": await Job.find_all().count(),
        "by_status": {
            s.value: await Job.find({"status": s.value}).count() for s in JobStatus
        },
        "by_job_type": by_type,
        "recent": await Job.find_all().sort("-created_at", "-_id").limit(RECENT_LIMIT).to_list(),
    }


async def job_summaries(ids: Iterable[ObjectId], *fields: str) -> Dict[ObjectId, Dict[str, Any]]:
    return await summaries(Job, ids, fields)
