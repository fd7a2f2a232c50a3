"""Input rejection before the store, the 500 envelope and token checks."""

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from jobmatch.core.config import Settings
from jobmatch.main import create_app

BAD_UID = "not-a-uuid"

ENDPOINTS = [
    ("GET", f"/jobseeker/{BAD_UID}"),
    ("PUT", f"/jobseeker/{BAD_UID}"),
    ("GET", f"/jobseeker/{BAD_UID}/profile"),
    ("GET", f"/jobseeker/{BAD_UID}/skill"),
    ("POST", f"/jobseeker/{BAD_UID}/skill"),
    ("DELETE", f"/jobseeker/{BAD_UID}/skill/Python"),
    ("GET", f"/jobseeker/{BAD_UID}/education"),
    ("POST", f"/jobseeker/{BAD_UID}/education"),
    ("PUT", f"/jobseeker/{BAD_UID}/education/1"),
    ("DELETE", f"/jobseeker/{BAD_UID}/education/1"),
    ("GET", f"/jobseeker/{BAD_UID}/certification"),
    ("DELETE", f"/jobseeker/{BAD_UID}/certification/1"),
    ("GET", f"/jobseeker/{BAD_UID}/dream_career"),
    ("POST", f"/jobseeker/{BAD_UID}/dream_career"),
    ("DELETE", f"/jobseeker/{BAD_UID}/dream_career/Pilot"),
    ("GET", f"/jobseeker/{BAD_UID}/dream_company"),
    ("DELETE", f"/jobseeker/{BAD_UID}/dream_company/Acme"),
    ("GET", f"/jobseeker/{BAD_UID}/exp"),
    ("PUT", f"/jobseeker/{BAD_UID}/exp/1"),
    ("GET", f"/jobseeker/{BAD_UID}/resumes"),
    ("GET", f"/jobseeker/{BAD_UID}/resumes/1"),
    ("DELETE", f"/jobseeker/{BAD_UID}/resumes/1"),
    ("GET", f"/employer/{BAD_UID}"),
    ("PUT", f"/employer/{BAD_UID}"),
]


def _store_must_not_be_used(*args, **kwargs):
    raise AssertionError("store was queried")


@pytest.mark.parametrize("method, url", ENDPOINTS)
def test_invalid_uid_is_rejected_before_the_store(client, db, monkeypatch, method, url):
    monkeypatch.setattr(db, "session", _store_must_not_be_used)
    resp = client.request(method, url, json={"name": "x"})
    assert resp.status_code == 400
    assert resp.text == "Invalid UUID"


def test_malformed_json_is_400(client):
    resp = client.post("/jobseeker", content=b"{not json", headers={"content-type": "application/json"})
    assert resp.status_code == 400


def test_store_failure_returns_error_envelope(app, client, db, monkeypatch, jobseeker_uid):
    def broken(*args, **kwargs):
        raise RuntimeError("connection refused")

    monkeypatch.setattr(db, "session", broken)
    # the pool is already open; no second lifespan
    failing = TestClient(app, raise_server_exceptions=False)
    resp = failing.get(f"/jobseeker/{jobseeker_uid}")

    assert resp.status_code == 500
    assert resp.json() == {
        "status_code": 500,
        "error": {
            "message": f"/jobseeker/{jobseeker_uid} error connection refused",
            "additional_information": {},
        },
    }


def test_error_text_can_be_hidden(tmp_path, monkeypatch):
    settings = Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'hidden.db'}",
        db_create_schema=True,
        expose_errors=False,
    )
    app = create_app(settings)
    with TestClient(app, raise_server_exceptions=False) as client:
        monkeypatch.setattr(app.state.db, "fetch_all", lambda *a, **k: 1 / 0)
        resp = client.get("/jobseeker")

    assert resp.status_code == 500
    assert resp.json()["error"]["message"] == "/jobseeker error ZeroDivisionError"


@pytest.fixture
def secured_client(tmp_path):
    settings = Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'auth.db'}",
        db_create_schema=True,
        auth_enabled=True,
        jwt_secret_key="test-secret",
    )
    with TestClient(create_app(settings)) as client:
        yield client


def test_token_required_when_auth_enabled(secured_client):
    resp = secured_client.post("/jobseeker", json={
        "firebaseID": "fb-1", "name": "Ada", "email": "ada@jobmatch.io",
    })
    uid = resp.text.split(": ")[1]

    assert secured_client.get(f"/jobseeker/{uid}").status_code == 401

    bad = {"Authorization": "Bearer not-a-token"}
    assert secured_client.get(f"/jobseeker/{uid}", headers=bad).status_code == 401

    token = jwt.encode({"sub": "fb-1"}, "test-secret", algorithm="HS256")
    resp = secured_client.get(f"/jobseeker/{uid}", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
    assert resp.json()["uid"] == uid


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy", "database": "connected"}
