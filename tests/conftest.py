"""
Shared fixtures: a file-backed SQLite database per test and a TestClient
running the full application lifespan against it.
"""

import pytest
from fastapi.testclient import TestClient

from jobmatch.core.config import Settings
from jobmatch.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'jobmatch.db'}",
        db_create_schema=True,
        log_level="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(app, client):
    return app.state.db


def create_jobseeker(client, name="Ada", email="ada@jobmatch.io", firebase_id=None):
    """POST a jobseeker and return its uid."""
    resp = client.post("/jobseeker", json={
        "firebaseID": firebase_id or f"fb-{name}-{email}",
        "name": name,
        "email": email,
    })
    assert resp.status_code == 200, resp.text
    prefix = "Jobseeker created with ID: "
    assert resp.text.startswith(prefix)
    return resp.text[len(prefix):]


@pytest.fixture
def jobseeker_uid(client):
    return create_jobseeker(client)
