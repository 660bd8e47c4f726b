# jobify/api/v1/schemas.py
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from jobify.db.documents import (
    Application,
    ApplicationStatus,
    Job,
    JobStatus,
    JobType,
    Role,
    User,
)

MIN_PASSWORD_LENGTH = 6

# A reference is the raw id, a summary dict of the referenced record after a
# join, or None when the join found nothing (e.g. the job was deleted).
Ref = Union[Dict[str, Any], str, None]
RAW = object()


def _ref(value: Any, raw_id: Any) -> Ref:
    return str(raw_id) if value is RAW else value


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _required_text(value: Any, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{label} is required")
    return value.strip()


def _one_of(value: Any, allowed, msg: str) -> Any:
    if not isinstance(value, str) or value not in {a.value for a in allowed}:
        raise ValueError(msg)
    return value


def _check_password(value: Any) -> str:
    if not isinstance(value, str) or len(value) < MIN_PASSWORD_LENGTH:
        raise ValueError(
            f"Please enter a password with {MIN_PASSWORD_LENGTH} or more characters"
        )
    return value


def _salary_text(value: Any) -> Any:
    # numbers are stored as their text form
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _required(**kwargs):
    # missing fields reach the validators so they report their own message
    return Field(default=None, validate_default=True, **kwargs)


# ---------- auth ----------

class RegisterIn(CamelModel):
    name: str = _required()
    email: EmailStr
    password: str = _required()
    role: Role = Role.USER

    @field_validator("name", mode="before")
    @classmethod
    def name_required(cls, v):
        return _required_text(v, "Name")

    @field_validator("email")
    @classmethod
    def lower_email(cls, v):
        return v.lower()

    @field_validator("password", mode="before")
    @classmethod
    def password_length(cls, v):
        return _check_password(v)

    @field_validator("role", mode="before")
    @classmethod
    def known_role(cls, v):
        if v is None:
            return Role.USER
        return _one_of(v, Role, "Role must be user, recruiter, or admin")


class LoginIn(CamelModel):
    email: EmailStr
    password: str = _required()

    @field_validator("email")
    @classmethod
    def lower_email(cls, v):
        return v.lower()

    @field_validator("password", mode="before")
    @classmethod
    def password_required(cls, v):
        if not isinstance(v, str) or not v:
            raise ValueError("Password is required")
        return v


class ProfileUpdate(CamelModel):
    """Only fields present in the request body are applied."""

    name: Optional[str] = None
    resume: Optional[str] = None
    skills: Optional[List[str]] = None
    company: Optional[str] = None
    position: Optional[str] = None
    current_password: Optional[str] = None
    new_password: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def name_not_blank(cls, v):
        return _required_text(v, "Name")

    @field_validator("resume", "company", "position")
    @classmethod
    def text_or_empty(cls, v):
        return v if v is not None else ""

    @field_validator("skills")
    @classmethod
    def skills_list(cls, v):
        return [s.strip() for s in (v or []) if s.strip()]

    @field_validator("new_password", mode="before")
    @classmethod
    def new_password_length(cls, v, info):
        # ignored unless paired with the current password
        if not v or not info.data.get("current_password"):
            return v
        return _check_password(v)

    def profile_fields(self) -> Dict[str, Any]:
        wanted = ("name", "resume", "skills", "company", "position")
        return {k: getattr(self, k) for k in wanted if k in self.model_fields_set}

    @property
    def wants_password_change(self) -> bool:
        return bool(self.current_password) and bool(self.new_password)


class UserSummary(BaseModel):
    id: str
    name: str
    email: str
    role: Role


class UserOut(CamelModel):
    id: str = Field(alias="_id")
    name: str
    email: str
    role: Role
    resume: str = ""
    skills: List[str] = Field(default_factory=list)
    company: str = ""
    position: str = ""
    created_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, user: User) -> "UserOut":
        return cls(
            id=str(user.id),
            name=user.name,
            email=user.email,
            role=user.role,
            resume=user.resume,
            skills=user.skills,
            company=user.company,
            position=user.position,
            created_at=user.created_at,
        )


class TokenOut(BaseModel):
    token: str


class LoginOut(BaseModel):
    token: str
    user: UserSummary


class MessageOut(BaseModel):
    msg: str


# ---------- jobs ----------

class JobCreate(CamelModel):
    title: str = _required()
    description: str = _required()
    company: str = _required()
    location: str = _required()
    job_type: JobType = _required()
    salary: Optional[str] = None
    requirements: List[str] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    status: JobStatus = JobStatus.OPEN

    @field_validator("title", "description", "company", "location", mode="before")
    @classmethod
    def text_required(cls, v, info):
        return _required_text(v, info.field_name.capitalize())

    @field_validator("job_type", mode="before")
    @classmethod
    def known_job_type(cls, v):
        return _one_of(v, JobType, "Job type is required")

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, v):
        return v or JobStatus.OPEN

    @field_validator("salary", mode="before")
    @classmethod
    def salary_text(cls, v):
        return _salary_text(v)


class JobUpdate(CamelModel):
    """Partial update: a field is changed only if the client sent it."""

    title: Optional[str] = None
    description: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    salary: Optional[str] = None
    job_type: Optional[JobType] = None
    requirements: Optional[List[str]] = None
    skills: Optional[List[str]] = None
    status: Optional[JobStatus] = None

    @field_validator("title", "description", "company", "location", mode="before")
    @classmethod
    def text_not_blank(cls, v, info):
        return _required_text(v, info.field_name.capitalize())

    @field_validator("job_type", "status", "requirements", "skills")
    @classmethod
    def not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{to_camel(info.field_name)} cannot be null")
        return v

    @field_validator("salary", mode="before")
    @classmethod
    def salary_text(cls, v):
        return _salary_text(v)

    def changes(self) -> Dict[str, Any]:
        return {k: getattr(self, k) for k in self.model_fields_set}


class JobOut(CamelModel):
    id: str = Field(alias="_id")
    title: str
    description: str
    company: str
    location: str
    salary: Optional[str] = None
    job_type: JobType
    requirements: List[str] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    status: JobStatus
    created_by: Ref = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, job: Job, created_by: Any = RAW) -> "JobOut":
        return cls(
            id=str(job.id),
            title=job.title,
            description=job.description,
            company=job.company,
            location=job.location,
            salary=job.salary,
            job_type=job.job_type,
            requirements=job.requirements,
            skills=job.skills,
            status=job.status,
            created_by=_ref(created_by, job.created_by),
            created_at=job.created_at,
        )


class JobStatusCounts(BaseModel):
    open: int = 0
    closed: int = 0


class JobTypeCounts(CamelModel):
    full_time: int = 0
    part_time: int = 0
    contract: int = 0
    internship: int = 0
    remote: int = 0


class JobStatsOut(CamelModel):
    total_jobs: int
    by_status: JobStatusCounts
    by_job_type: JobTypeCounts
    recent_jobs: List[JobOut]


# ---------- applications ----------

class ApplicationCreate(CamelModel):
    job: str = _required()
    cover_letter: str = _required()
    resume: Optional[str] = None

    @field_validator("job", mode="before")
    @classmethod
    def job_required(cls, v):
        return _required_text(v, "Job ID")

    @field_validator("cover_letter", mode="before")
    @classmethod
    def cover_letter_required(cls, v):
        return _required_text(v, "Cover letter")


class ApplicationStatusUpdate(CamelModel):
    status: ApplicationStatus = _required()
    feedback: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def known_status(cls, v):
        return _one_of(v, ApplicationStatus, "Status is required")


class ApplicationOut(CamelModel):
    id: str = Field(alias="_id")
    job: Ref = None
    applicant: Ref = None
    cover_letter: str
    resume: str = ""
    status: ApplicationStatus
    feedback: str = ""
    created_at: Optional[datetime] = None

    @classmethod
    def from_document(
        cls, application: Application, job: Any = RAW, applicant: Any = RAW
    ) -> "ApplicationOut":
        return cls(
            id=str(application.id),
            job=_ref(job, application.job),
            applicant=_ref(applicant, application.applicant),
            cover_letter=application.cover_letter,
            resume=application.resume,
            status=application.status,
            feedback=application.feedback,
            created_at=application.created_at,
        )


class ApplicationStatusCounts(BaseModel):
    pending: int = 0
    shortlisted: int = 0
    rejected: int = 0
    interviewed: int = 0
    hired: int = 0


class ApplicationStatsOut(CamelModel):
    total_applications: int
    by_status: ApplicationStatusCounts
    recent_applications: List[ApplicationOut]
