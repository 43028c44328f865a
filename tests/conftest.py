# File: tests/conftest.py

import pytest
from fastapi.testclient import TestClient

from winajaya.core.config import Settings
from winajaya.db.session import Database
from winajaya.main import create_application


@pytest.fixture
def settings(tmp_path):
    return Settings(
        environment="development",
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
    )


@pytest.fixture
def database(settings):
    db = Database(settings.database_url)
    db.sync()
    yield db
    db.dispose()


@pytest.fixture
def app(settings, database):
    return create_application(settings=settings, database=database)


@pytest.fixture
def client(app):
    # Unhandled errors should come back as 500 responses, not test failures
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def session(database):
    db = database.session()
    yield db
    db.close()


@pytest.fixture
def branch(client):
    resp = client.post("/api/branches", json={"name": "Jakarta", "address": "Jl. Sudirman 1"})
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture
def user(client, branch):
    resp = client.post(
        "/api/users",
        json={
            "name": "Siti",
            "email": "siti@example.com",
            "password": "rahasia123",
            "branch_id": branch["id"],
        },
    )
    assert resp.status_code == 201
    return resp.json()
