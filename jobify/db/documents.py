"""Beanie document models for the three Jobify collections.

Stored field names are snake_case; the API layer renames them to the
camelCase names clients expect (see jobify/api/v1/schemas.py).
"""
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from beanie import Document, PydanticObjectId
from pydantic import Field
from pymongo import ASCENDING, DESCENDING, IndexModel


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Role(str, Enum):
    USER = "user"
    RECRUITER = "recruiter"
    ADMIN = "admin"


class JobType(str, Enum):
    FULL_TIME = "Full-time"
    PART_TIME = "Part-time"
    CONTRACT = "Contract"
    INTERNSHIP = "Internship"
    REMOTE = "Remote"


class JobStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    SHORTLISTED = "shortlisted"
    INTERVIEWED = "interviewed"
    REJECTED = "rejected"
    HIRED = "hired"


class User(Document):
    name: str
    email: str
    password: str
    role: Role = Role.USER
    # job seekers
    resume: str = ""
    skills: List[str] = Field(default_factory=list)
    # recruiters
    company: str = ""
    position: str = ""
    created_at: datetime = Field(default_factory=_now)

    class Settings:
        name = "users"
        indexes = [
            IndexModel([("email", ASCENDING)], unique=True, name="email_unique"),
        ]


class Job(Document):
    title: str
    description: str
    company: str
    location: str
    salary: Optional[str] = None
    job_type: JobType = JobType.FULL_TIME
    requirements: List[str] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    status: JobStatus = JobStatus.OPEN
    created_by: PydanticObjectId
    created_at: datetime = Field(default_factory=_now)

    class Settings:
        name = "jobs"
        indexes = [
            IndexModel([("status", ASCENDING), ("created_at", DESCENDING)], name="status_created"),
            IndexModel([("created_by", ASCENDING)], name="created_by"),
        ]


class Application(Document):
    job: PydanticObjectId
    applicant: PydanticObjectId
    cover_letter: str
    resume: str = ""
    status: ApplicationStatus = ApplicationStatus.PENDING
    feedback: str = ""
    created_at: datetime = Field(default_factory=_now)

    class Settings:
        name = "applications"
        indexes = [
            # one application per (job, applicant)
            IndexModel(
                [("job", ASCENDING), ("applicant", ASCENDING)],
                unique=True,
                name="job_applicant_unique",
            ),
            IndexModel([("applicant", ASCENDING)], name="applicant"),
        ]


DOCUMENT_MODELS = [User, Job, Application]
