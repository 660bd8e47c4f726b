# tests/test_client_api.py
import httpx
import pytest
from httpx import ASGITransport

from jobify.client.api import ApiError, JobifyClient, Session
from jobify.main import app


@pytest.mark.asyncio
async def test_token_is_injected_per_session():
    seen = []

    def handler(request: httpx.Request):
        seen.append(request.headers.get("x-auth-token"))
        if request.url.path == "/api/auth/login":
            return httpx.Response(200, json={"token": "tok-1", "user": {"id": "u1", "name": "Ada"}})
        return httpx.Response(200, json=[])

    transport = httpx.MockTransport(handler)
    async with JobifyClient("http://api.test", transport=transport) as api, \
            JobifyClient("http://api.test", transport=transport) as anonymous:
        await api.list_jobs()
        await api.login("ada@example.com", "secret123")
        await api.my_applications()
        await anonymous.list_jobs()
        api.logout()
        await api.list_jobs()

    assert seen == [None, None, "tok-1", None, None]


@pytest.mark.asyncio
async def test_error_responses_raise_api_error():
    def handler(request: httpx.Request):
        if request.method == "POST":
            return httpx.Response(400, json={"errors": [{"msg": "Cover letter is required", "param": "coverLetter"}]})
        return httpx.Response(404, json={"msg": "Job not found"})

    async with JobifyClient("http://api.test", transport=httpx.MockTransport(handler)) as api:
        with pytest.raises(ApiError) as missing:
            await api.get_job("abc")
        assert missing.value.status_code == 404
        assert missing.value.msg == "Job not found"

        with pytest.raises(ApiError) as invalid:
            await api.apply("abc", "")
        assert invalid.value.status_code == 400
        assert invalid.value.msg == "Cover letter is required"
        assert invalid.value.errors[0]["param"] == "coverLetter"


@pytest.mark.asyncio
async def test_client_against_app(db):
    transport = ASGITransport(app=app)
    recruiter = JobifyClient("http://testserver", transport=transport)
    seeker = JobifyClient("http://testserver", session=Session(), transport=transport)
    try:
        await recruiter.register("Rita", "rita@example.com", "secret123", role="recruiter")
        assert recruiter.session.user["role"] == "recruiter"
        job = await recruiter.create_job(
            title="ML Engineer", description="Models", company="Acme",
            location="Remote", jobType="Remote",
        )

        await seeker.register("Sam", "sam@example.com", "secret123")
        assert [j["_id"] for j in await seeker.list_jobs(job_type="Remote")] == [job["_id"]]
        application = await seeker.apply(job["_id"], "Hello")

        await recruiter.update_application(application["_id"], "hired", feedback="Welcome")
        assert (await seeker.get_job(job["_id"]))["status"] == "closed"
        (mine,) = await seeker.my_applications()
        assert mine["status"] == "hired"
        assert mine["feedback"] == "Welcome"

        with pytest.raises(ApiError) as denied:
            await seeker.job_stats()
        assert denied.value.status_code == 403
    finally:
        await recruiter.aclose()
        await seeker.aclose()
