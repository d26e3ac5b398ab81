# File: tests/conftest.py

import os

# Settings are read at import time, so configure them before the app loads.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from planner.api.deps import get_db
from planner.db.init_db import init_db
from planner.db.session import build_engine
from planner.main import app
from planner.models.base import Base

API = "/api/v1"


@pytest.fixture()
def db_session_factory():
    engine = build_engine("sqlite://")
    init_db(engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def client(db_session_factory):
    def override_get_db():
        db = db_session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def register(client):
    """
    Register a user and return ``(user, headers)`` ready for authed calls.
    """

    def _register(name: str, email: str, password: str = "secret123"):
        resp = client.post(
            f"{API}/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert resp.status_code == 201, resp.text
        user = resp.json()["data"]
        return user, {"Authorization": f"Bearer {user['token']}"}

    return _register


@pytest.fixture()
def owner(register):
    return register("Olivia Owner", "owner@example.com")


@pytest.fixture()
def member(register):
    return register("Max Member", "member@example.com")


@pytest.fixture()
def outsider(register):
    return register("Uma Outsider", "outsider@example.com")


@pytest.fixture()
def project(client, owner):
    _, headers = owner
    resp = client.post(
        f"{API}/projects/",
        json={
            "name": "Website relaunch",
            "description": "Rebuild the marketing site",
            "startDate": "2024-01-01T00:00:00",
            "endDate": "2024-12-31T00:00:00",
        },
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


@pytest.fixture()
def project_with_member(client, owner, member, project):
    _, headers = owner
    resp = client.post(
        f"{API}/projects/{project['id']}/members",
        json={"email": "member@example.com"},
        headers=headers,
    )
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]


def make_task(client, headers, project_id, **overrides):
    body = {
        "project": project_id,
        "name": "Design",
        "startDate": "2024-01-01T00:00:00",
        "endDate": "2024-01-31T00:00:00",
    }
    body.update(overrides)
    return client.post(f"{API}/tasks/", json=body, headers=headers)
