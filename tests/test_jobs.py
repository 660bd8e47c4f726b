# tests/test_jobs.py
import pytest
from pymongo.errors import PyMongoError

from jobify.db.documents import Application


@pytest.mark.asyncio
async def test_plain_user_cannot_create_job(client, make_user):
    seeker = await make_user(role="user")
    r = await client.post(
        "/api/jobs",
        json={"title": "X", "description": "Y", "company": "Z", "location": "W", "jobType": "Remote"},
        headers=seeker["headers"],
    )
    assert r.status_code == 403
    assert r.json() == {"msg": "Not authorized to access this resource"}


@pytest.mark.asyncio
async def test_created_job_is_listed_as_open(client, make_user, make_job):
    recruiter = await make_user(role="recruiter")
    job = await make_job(recruiter, salary="60k", skills=["python"])
    assert job["status"] == "open"
    assert job["createdBy"] == recruiter["user"]["_id"]
    assert job["jobType"] == "Full-time"

    r = await client.get("/api/jobs")
    assert r.status_code == 200
    listed = r.json()
    assert [j["_id"] for j in listed] == [job["_id"]]
    # creator is joined on the public listing
    assert listed[0]["createdBy"]["_id"] == recruiter["user"]["_id"]
    assert listed[0]["createdBy"]["name"] == "Recruiter"


@pytest.mark.asyncio
async def test_create_job_validation(client, make_user):
    recruiter = await make_user(role="recruiter")
    r = await client.post(
        "/api/jobs",
        json={"title": "  ", "company": "Acme", "location": "Berlin", "jobType": "Gig"},
        headers=recruiter["headers"],
    )
    assert r.status_code == 400
    params = {e["param"] for e in r.json()["errors"]}
    assert params == {"title", "description", "jobType"}


@pytest.mark.asyncio
async def test_listing_filters(client, make_user, make_job):
    recruiter = await make_user(role="recruiter")
    backend = await make_job(recruiter, title="Senior Engineer", location="Berlin")
    remote = await make_job(
        recruiter, title="Designer", company="Pixel", description="UI work",
        location="Anywhere", jobType="Remote",
    )
    consultancy = await make_job(
        recruiter, title="Consultant", company="Engineering Partners",
        description="Advisory", location="Munich", jobType="Contract",
    )
    closed = await make_job(recruiter, title="Engineer II", status="closed")

    r = await client.get("/api/jobs", params={"jobType": "Remote"})
    assert [j["_id"] for j in r.json()] == [remote["_id"]]

    r = await client.get("/api/jobs", params={"search": "engineer"})
    assert {j["_id"] for j in r.json()} == {backend["_id"], consultancy["_id"]}

    r = await client.get("/api/jobs", params={"location": "ber"})
    assert {j["_id"] for j in r.json()} == {backend["_id"]}

    r = await client.get("/api/jobs", params={"status": "closed"})
    assert [j["_id"] for j in r.json()] == [closed["_id"]]

    r = await client.get("/api/jobs", params={"status": "all"})
    ids = [j["_id"] for j in r.json()]
    # newest first
    assert ids == [closed["_id"], consultancy["_id"], remote["_id"], backend["_id"]]

    r = await client.get("/api/jobs", params={"jobType": "all", "location": "all"})
    assert len(r.json()) == 3


@pytest.mark.asyncio
async def test_search_treats_input_literally(client, make_user, make_job):
    recruiter = await make_user(role="recruiter")
    await make_job(recruiter, title="C++ Developer")
    await make_job(recruiter, title="Cobol Developer")
    r = await client.get("/api/jobs", params={"search": "c++"})
    assert [j["title"] for j in r.json()] == ["C++ Developer"]


@pytest.mark.asyncio
async def test_get_job_not_found(client, make_user, make_job):
    r = await client.get("/api/jobs/not-an-object-id")
    assert r.status_code == 404
    assert r.json() == {"msg": "Job not found"}

    r = await client.get("/api/jobs/64b7f0c2a1b2c3d4e5f60718")
    assert r.status_code == 404

    recruiter = await make_user(role="recruiter")
    job = await make_job(recruiter)
    r = await client.get(f"/api/jobs/{job['_id']}")
    assert r.status_code == 200
    assert r.json()["title"] == "Backend Engineer"
    assert r.json()["createdBy"]["company"] == ""


@pytest.mark.asyncio
async def test_only_owner_or_admin_can_update_or_delete(client, make_user, make_job):
    owner = await make_user(role="recruiter")
    other = await make_user(role="recruiter")
    admin = await make_user(role="admin")
    job = await make_job(owner)

    r = await client.put(f"/api/jobs/{job['_id']}", json={"title": "Hijacked"}, headers=other["headers"])
    assert r.status_code == 401
    assert r.json() == {"msg": "User not authorized"}
    r = await client.delete(f"/api/jobs/{job['_id']}", headers=other["headers"])
    assert r.status_code == 401

    r = await client.put(f"/api/jobs/{job['_id']}", json={"title": "Staff Engineer"}, headers=admin["headers"])
    assert r.status_code == 200
    assert r.json()["title"] == "Staff Engineer"

    r = await client.delete(f"/api/jobs/{job['_id']}", headers=admin["headers"])
    assert r.status_code == 200
    assert r.json() == {"msg": "Job removed"}
    assert (await client.get(f"/api/jobs/{job['_id']}")).status_code == 404


@pytest.mark.asyncio
async def test_update_missing_job(client, make_user):
    owner = await make_user(role="recruiter")
    r = await client.put("/api/jobs/64b7f0c2a1b2c3d4e5f60718", json={"title": "x"}, headers=owner["headers"])
    assert r.status_code == 404
    r = await client.delete("/api/jobs/bogus", headers=owner["headers"])
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_partial_update_leaves_other_fields_alone(client, make_user, make_job):
    owner = await make_user(role="recruiter")
    job = await make_job(owner, salary="50k", requirements=["3 years"], skills=["python"])

    r = await client.put(f"/api/jobs/{job['_id']}", json={"salary": "70k"}, headers=owner["headers"])
    assert r.status_code == 200
    updated = r.json()
    assert updated["salary"] == "70k"
    for key in ("title", "description", "company", "location", "jobType", "requirements", "skills", "status"):
        assert updated[key] == job[key]

    # blanking the salary is a real change
    r = await client.put(f"/api/jobs/{job['_id']}", json={"salary": ""}, headers=owner["headers"])
    assert r.json()["salary"] == ""
    r = await client.put(f"/api/jobs/{job['_id']}", json={"skills": []}, headers=owner["headers"])
    assert r.json()["skills"] == []
    assert r.json()["requirements"] == ["3 years"]


@pytest.mark.asyncio
async def test_numeric_salary_is_stored_as_text(client, make_user, make_job):
    owner = await make_user(role="recruiter")
    job = await make_job(owner, salary=50000)
    assert job["salary"] == "50000"

    r = await client.put(f"/api/jobs/{job['_id']}", json={"salary": 65000}, headers=owner["headers"])
    assert r.status_code == 200
    assert r.json()["salary"] == "65000"


@pytest.mark.asyncio
async def test_update_rejects_blank_required_fields(client, make_user, make_job):
    owner = await make_user(role="recruiter")
    job = await make_job(owner)
    r = await client.put(
        f"/api/jobs/{job['_id']}", json={"title": "", "jobType": None}, headers=owner["headers"]
    )
    assert r.status_code == 400
    assert {e["param"] for e in r.json()["errors"]} == {"title", "jobType"}


@pytest.mark.asyncio
async def test_delete_keeps_applications(client, make_user, make_job, apply_to):
    owner = await make_user(role="recruiter")
    seeker = await make_user()
    job = await make_job(owner)
    assert (await apply_to(seeker, job)).status_code == 200

    r = await client.delete(f"/api/jobs/{job['_id']}", headers=owner["headers"])
    assert r.status_code == 200
    assert await Application.find_all().count() == 1

    mine = (await client.get("/api/applications/me", headers=seeker["headers"])).json()
    assert len(mine) == 1
    assert mine[0]["job"] is None


@pytest.mark.asyncio
async def test_recruiter_sees_only_own_jobs(client, make_user, make_job):
    me = await make_user(role="recruiter")
    other = await make_user(role="recruiter")
    first = await make_job(me, title="First")
    second = await make_job(me, title="Second", status="closed")
    await make_job(other, title="Not mine")

    r = await client.get("/api/jobs/recruiter/myjobs", headers=me["headers"])
    assert r.status_code == 200
    assert [j["_id"] for j in r.json()] == [second["_id"], first["_id"]]

    seeker = await make_user()
    r = await client.get("/api/jobs/recruiter/myjobs", headers=seeker["headers"])
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_job_stats_for_admin_only(client, make_user, make_job):
    recruiter = await make_user(role="recruiter")
    admin = await make_user(role="admin")
    for job_type in ("Full-time", "Remote", "Remote", "Internship"):
        await make_job(recruiter, jobType=job_type)
    await make_job(recruiter, jobType="Contract", status="closed")
    for i in range(2):
        await make_job(recruiter, title=f"Latest {i}", jobType="Part-time")

    r = await client.get("/api/jobs/admin/stats", headers=recruiter["headers"])
    assert r.status_code == 403

    r = await client.get("/api/jobs/admin/stats", headers=admin["headers"])
    assert r.status_code == 200
    stats = r.json()
    assert stats["totalJobs"] == 7
    assert stats["byStatus"] == {"open": 6, "closed": 1}
    assert stats["byJobType"] == {
        "fullTime": 1, "partTime": 2, "contract": 1, "internship": 1, "remote": 2,
    }
    assert len(stats["recentJobs"]) == 5
    assert stats["recentJobs"][0]["title"] == "Latest 1"


@pytest.mark.asyncio
async def test_store_failure_is_a_generic_500(client, monkeypatch):
    async def broken(**filters):
        raise PyMongoError("connection reset")

    monkeypatch.setattr("jobify.repositories.jobs.list_jobs", broken)
    r = await client.get("/api/jobs")
    assert r.status_code == 500
    assert r.json() == {"msg": "Server error"}
