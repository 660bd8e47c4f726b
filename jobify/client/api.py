# jobify/client/api.py
"""
Async client for the Jobify REST API.

The token lives on a `Session`; `TokenAuth` reads it on every request, so
logging in or out on one session never leaks into another client.

    async with JobifyClient("http://localhost:8000") as api:
        await api.login("ada@example.com", "secret123")
        jobs = await api.list_jobs(search="engineer")
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

TOKEN_HEADER = "x-auth-token"


@dataclass
class Session:
    token: Optional[str] = None
    user: Optional[Dict[str, Any]] = None

    def clear(self) -> None:
        self.token = None
        self.user = None


class TokenAuth(httpx.Auth):
    def __init__(self, session: Session):
        self.session = session

    def auth_flow(self, request: httpx.Request):
        if self.session.token:
            request.headers[TOKEN_HEADER] = self.session.token
        yield request


class ApiError(Exception):
    def __init__(self, status_code: int, msg: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(f"{status_code}: {msg}")
        self.status_code = status_code
        self.msg = msg
        self.errors = errors or []


def _error_from(resp: httpx.Response) -> ApiError:
    try:
        body = resp.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    errors = body.get("errors") or []
    msg = body.get("msg") or (errors[0].get("msg") if errors else None) or resp.reason_phrase
    return ApiError(resp.status_code, msg, errors)


@dataclass
class JobifyClient:
    base_url: str = "http://localhost:8000"
    session: Session = field(default_factory=Session)
    timeout: float = 10.0
    transport: Optional[httpx.AsyncBaseTransport] = None

    def __post_init__(self):
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            auth=TokenAuth(self.session),
            timeout=self.timeout,
            transport=self.transport,
        )

    async def __aenter__(self) -> "JobifyClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        resp = await self._http.request(method, path, **kwargs)
        if resp.status_code >= 400:
            err = _error_from(resp)
            logger.debug("%s %s -> %s %s", method, path, err.status_code, err.msg)
            raise err
        return resp.json()

    # ---------- auth ----------

    async def register(self, name: str, email: str, password: str, role: str = "user") -> str:
        data = await self._request(
            "POST", "/api/auth/register",
            json={"name": name, "email": email, "password": password, "role": role},
        )
        self.session.token = data["token"]
        self.session.user = await self.me()
        return self.session.token

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        data = await self._request(
            "POST", "/api/auth/login", json={"email": email, "password": password}
        )
        self.session.token = data["token"]
        self.session.user = data["user"]
        return data

    def logout(self) -> None:
        self.session.clear()

    async def me(self) -> Dict[str, Any]:
        return await self._request("GET", "/api/auth/me")

    async def update_profile(self, **fields: Any) -> Dict[str, Any]:
        user = await self._request("PUT", "/api/auth/update", json=fields)
        self.session.user = user
        return user

    # ---------- jobs ----------

    async def list_jobs(self, **filters: Optional[str]) -> List[Dict[str, Any]]:
        params = {k: v for k, v in filters.items() if v is not None}
        if "job_type" in params:
            params["jobType"] = params.pop("job_type")
        return await self._request("GET", "/api/jobs", params=params)

    async def get_job(self, job_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/api/jobs/{job_id}")

    async def create_job(self, **fields: Any) -> Dict[str, Any]:
        return await self._request("POST", "/api/jobs", json=fields)

    async def update_job(self, job_id: str, **fields: Any) -> Dict[str, Any]:
        return await self._request("PUT", f"/api/jobs/{job_id}", json=fields)

    async def delete_job(self, job_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/api/jobs/{job_id}")

    async def recruiter_jobs(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/api/jobs/recruiter/myjobs")

    async def job_stats(self) -> Dict[str, Any]:
        return await self._request("GET", "/api/jobs/admin/stats")

    # ---------- applications ----------

    async def apply(self, job_id: str, cover_letter: str, resume: Optional[str] = None) -> Dict[str, Any]:
        body = {"job": job_id, "coverLetter": cover_letter}
        if resume is not None:
            body["resume"] = resume
        return await self._request("POST", "/api/applications", json=body)

    async def my_applications(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/api/applications/me")

    async def job_applications(self, job_id: str) -> List[Dict[str, Any]]:
        return await self._request("GET", f"/api/applications/job/{job_id}")

    async def update_application(
        self, application_id: str, status: str, feedback: Optional[str] = None
    ) -> Dict[str, Any]:
        body = {"status": status}
        if feedback is not None:
            body["feedback"] = feedback
        return await self._request("PUT", f"/api/applications/{application_id}", json=body)

    async def application_stats(self) -> Dict[str, Any]:
        return await self._request("GET", "/api/applications/admin/stats")
