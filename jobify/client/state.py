# jobify/client/state.py
"""
Client-side state for the three domains (auth, jobs, applications).

Each domain has an immutable state dataclass, a set of action classes and a
pure `reduce_*` function returning the next state. Unknown actions return
the state unchanged.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

Record = Dict[str, Any]


# ---------- actions ----------

@dataclass(frozen=True)
class SetLoading:
    pass


@dataclass(frozen=True)
class ClearError:
    pass


@dataclass(frozen=True)
class Failed:
    error: str


@dataclass(frozen=True)
class UserLoaded:
    user: Record


@dataclass(frozen=True)
class LoginSucceeded:
    token: str
    user: Optional[Record] = None


@dataclass(frozen=True)
class RegisterSucceeded:
    token: str


@dataclass(frozen=True)
class AuthFailed:
    error: Optional[str] = None


@dataclass(frozen=True)
class Logout:
    pass


@dataclass(frozen=True)
class StatsLoaded:
    stats: Record


@dataclass(frozen=True)
class JobsLoaded:
    jobs: Tuple[Record, ...]


@dataclass(frozen=True)
class JobLoaded:
    job: Record


@dataclass(frozen=True)
class JobCreated:
    job: Record


@dataclass(frozen=True)
class JobUpdated:
    job: Record


@dataclass(frozen=True)
class JobDeleted:
    job_id: str


@dataclass(frozen=True)
class ApplicationsLoaded:
    applications: Tuple[Record, ...]


@dataclass(frozen=True)
class ApplicationLoaded:
    application: Record


@dataclass(frozen=True)
class ApplicationCreated:
    application: Record


@dataclass(frozen=True)
class ApplicationUpdated:
    application: Record


# ---------- state ----------

@dataclass(frozen=True)
class AuthState:
    token: Optional[str] = None
    user: Optional[Record] = None
    is_authenticated: Optional[bool] = None
    loading: bool = True
    error: Optional[str] = None


@dataclass(frozen=True)
class JobsState:
    jobs: Tuple[Record, ...] = field(default_factory=tuple)
    job: Optional[Record] = None
    stats: Optional[Record] = None
    loading: bool = True
    error: Optional[str] = None


@dataclass(frozen=True)
class ApplicationsState:
    applications: Tuple[Record, ...] = field(default_factory=tuple)
    application: Optional[Record] = None
    stats: Optional[Record] = None
    loading: bool = True
    error: Optional[str] = None


def _record_id(record: Record) -> Any:
    return record.get("_id", record.get("id"))


def _replace_record(records: Tuple[Record, ...], updated: Record) -> Tuple[Record, ...]:
    rid = _record_id(updated)
    return tuple(updated if _record_id(r) == rid else r for r in records)


def reduce_auth(state: AuthState, action: Any) -> AuthState:
    if isinstance(action, UserLoaded):
        return replace(state, user=action.user, is_authenticated=True, loading=False)
    if isinstance(action, LoginSucceeded):
        return replace(
            state,
            token=action.token,
            user=action.user if action.user is not None else state.user,
            is_authenticated=True,
            loading=False,
            error=None,
        )
    if isinstance(action, RegisterSucceeded):
        return replace(state, token=action.token, is_authenticated=True, loading=False, error=None)
    if isinstance(action, (AuthFailed, Logout)):
        error = action.error if isinstance(action, AuthFailed) else None
        return replace(
            state, token=None, user=None, is_authenticated=False, loading=False, error=error
        )
    if isinstance(action, ClearError):
        return replace(state, error=None)
    return state


def reduce_jobs(state: JobsState, action: Any) -> JobsState:
    if isinstance(action, SetLoading):
        return replace(state, loading=True)
    if isinstance(action, JobsLoaded):
        return replace(state, jobs=tuple(action.jobs), loading=False)
    if isinstance(action, JobLoaded):
        return replace(state, job=action.job, loading=False)
    if isinstance(action, StatsLoaded):
        return replace(state, stats=action.stats, loading=False)
    if isinstance(action, JobCreated):
        return replace(state, jobs=state.jobs + (action.job,), loading=False)
    if isinstance(action, JobUpdated):
        return replace(
            state, jobs=_replace_record(state.jobs, action.job), job=action.job, loading=False
        )
    if isinstance(action, JobDeleted):
        jobs = tuple(j for j in state.jobs if _record_id(j) != action.job_id)
        job = None if state.job and _record_id(state.job) == action.job_id else state.job
        return replace(state, jobs=jobs, job=job, loading=False)
    if isinstance(action, Failed):
        return replace(state, error=action.error, loading=False)
    if isinstance(action, ClearError):
        return replace(state, error=None)
    return state


def reduce_applications(state: ApplicationsState, action: Any) -> ApplicationsState:
    if isinstance(action, SetLoading):
        return replace(state, loading=True)
    if isinstance(action, ApplicationsLoaded):
        return replace(state, applications=tuple(action.applications), loading=False)
    if isinstance(action, ApplicationLoaded):
        return replace(state, application=action.application, loading=False)
    if isinstance(action, StatsLoaded):
        return replace(state, stats=action.stats, loading=False)
    if isinstance(action, ApplicationCreated):
        return replace(
            state,
            applications=state.applications + (action.application,),
            application=action.application,
            loading=False,
        )
    if isinstance(action, ApplicationUpdated):
        return replace(
            state,
            applications=_replace_record(state.applications, action.application),
            application=action.application,
            loading=False,
        )
    if isinstance(action, Failed):
        return replace(state, error=action.error, loading=False)
    if isinstance(action, ClearError):
        return replace(state, error=None)
    return state
