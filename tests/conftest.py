# tests/conftest.py
import os
import uuid

# settings are read at import time
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from httpx import AsyncClient, ASGITransport
from mongomock_motor import AsyncMongoMockClient

from jobify.db.mongo import init_db
from jobify.main import app


@pytest.fixture
async def db():
    """Fresh in-memory Mongo database with Beanie and its indexes initialised."""
    client = AsyncMongoMockClient()
    database = client[f"jobify_test_{uuid.uuid4().hex[:8]}"]
    await init_db(database)
    yield database


@pytest.fixture
async def client(db):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def make_user(client):
    async def _make(role="user", name=None, email=None, password="secret123"):
        email = email or f"{role}-{uuid.uuid4().hex[:8]}@example.com"
        payload = {"name": name or role.title(), "email": email, "password": password, "role": role}
        r = await client.post("/api/auth/register", json=payload)
        assert r.status_code == 200, r.text
        token = r.json()["token"]
        headers = {"x-auth-token": token}
        me = await client.get("/api/auth/me", headers=headers)
        assert me.status_code == 200, me.text
        return {
            "token": token,
            "headers": headers,
            "user": me.json(),
            "email": email,
            "password": password,
        }

    return _make


@pytest.fixture
def make_job(client):
    async def _make(owner, **overrides):
        payload = {
            "title": "Backend Engineer",
            "description": "Build and run our REST APIs",
            "company": "Acme",
            "location": "Berlin",
            "jobType": "Full-time",
        }
        payload.update(overrides)
        r = await client.post("/api/jobs", json=payload, headers=owner["headers"])
        assert r.status_code == 200, r.text
        return r.json()

    return _make


@pytest.fixture
def apply_to(client):
    async def _apply(applicant, job, cover_letter="I would love to join.", **extra):
        body = {"job": job["_id"], "coverLetter": cover_letter, **extra}
        return await client.post("/api/applications", json=body, headers=applicant["headers"])

    return _apply
