"""Experience, education, certification and resume CRUD."""

import uuid
from unittest.mock import MagicMock

import pytest

from jobmatch.api.routes.resume_routes import advance_resume_sequence

EXPERIENCE = {
    "title": "Engineer",
    "start_date": "2019-01-01",
    "end_date": "2021-06-30",
    "description": "Built things",
}
EDUCATION = {
    "school_name": "Waterloo",
    "start_date": "2014-09-01",
    "grad_date": "2019-04-30",
    "program": "Computer Science",
}
CERTIFICATION = {
    "cert_name": "CKA",
    "start_date": "2022-01-01",
    "end_date": "2025-01-01",
    "issuer": "CNCF",
}

# (path segment, body, id column, added message)
SECTIONS = [
    ("exp", EXPERIENCE, "exp_id", "Added job experience"),
    ("education", EDUCATION, "ed_id", "Added education"),
    ("certification", CERTIFICATION, "c_id", "Added certification"),
]


@pytest.mark.parametrize("section, body, key, added", SECTIONS)
def test_section_crud(client, jobseeker_uid, section, body, key, added):
    base = f"/jobseeker/{jobseeker_uid}/{section}"
    assert client.get(base).json() == []

    resp = client.post(base, json=body)
    assert resp.status_code == 200
    assert resp.text == added

    rows = client.get(base).json()
    assert len(rows) == 1
    row_id = rows[0][key]
    assert client.get(f"{base}/{row_id}").json()[key] == row_id

    changed = dict(body, start_date="2000-01-01")
    resp = client.put(f"{base}/{row_id}", json=changed)
    assert resp.status_code == 200
    assert resp.json()["start_date"] == "2000-01-01"

    resp = client.delete(f"{base}/{row_id}")
    assert resp.status_code == 200
    assert client.get(base).json() == []

    resp = client.delete(f"{base}/{row_id}")
    assert resp.status_code == 400
    assert resp.text.endswith("could not be found")


@pytest.mark.parametrize("section, body, key, added", SECTIONS)
def test_section_put_takes_id_from_body(client, jobseeker_uid, section, body, key, added):
    base = f"/jobseeker/{jobseeker_uid}/{section}"
    client.post(base, json=body)
    row_id = client.get(base).json()[0][key]

    resp = client.put(base, json={**body, key: row_id})
    assert resp.status_code == 200

    resp = client.request("DELETE", base, json={key: row_id})
    assert resp.status_code == 200


@pytest.mark.parametrize("section, body, key, added", SECTIONS)
def test_section_put_is_full_replace(client, jobseeker_uid, section, body, key, added):
    base = f"/jobseeker/{jobseeker_uid}/{section}"
    client.post(base, json=body)
    row_id = client.get(base).json()[0][key]

    partial = {"start_date": "2001-01-01"}
    resp = client.put(f"{base}/{row_id}", json=partial)
    assert resp.status_code == 400
    assert resp.text == "One of the field is empty"


def test_experience_rejects_bad_date(client, jobseeker_uid):
    resp = client.post(f"/jobseeker/{jobseeker_uid}/exp", json=dict(EXPERIENCE, end_date="last year"))
    assert resp.status_code == 400
    assert resp.text == "Invalid end date"


def test_education_bad_id(client, jobseeker_uid):
    resp = client.delete(f"/jobseeker/{jobseeker_uid}/education/abc")
    assert resp.status_code == 400
    assert resp.text == "Invalid education ID"


def test_section_for_missing_jobseeker(client):
    ghost = str(uuid.uuid4())
    resp = client.get(f"/jobseeker/{ghost}/certification")
    assert resp.status_code == 400
    assert resp.text == "Jobseeker could not be found"

    resp = client.post(f"/jobseeker/{ghost}/education", json=EDUCATION)
    assert resp.status_code == 400


def test_resume_crud(client, jobseeker_uid):
    base = f"/jobseeker/{jobseeker_uid}/resumes"
    assert client.get(base).json() == []

    snapshot = [{"section": "summary", "text": "Hello"}]
    resp = client.post(base, json=snapshot)
    assert resp.status_code == 200
    created = resp.json()
    assert created["snapshot"] == snapshot
    resume_id = created["resume_id"]

    assert client.get(f"{base}/{resume_id}").json()["snapshot"] == snapshot

    resp = client.put(f"{base}/{resume_id}", json={"summary": "Updated"})
    assert resp.status_code == 200
    assert resp.json()["snapshot"] == {"summary": "Updated"}

    resp = client.post(f"{base}/500", json={"v": 2})
    assert resp.status_code == 200
    assert resp.json()["resume_id"] == 500
    assert len(client.get(base).json()) == 2

    resp = client.delete(f"{base}/{resume_id}")
    assert resp.status_code == 200
    assert resp.text == "Deleted resume"
    assert client.get(f"{base}/{resume_id}").status_code == 404


def test_resume_status_codes(client, jobseeker_uid):
    base = f"/jobseeker/{jobseeker_uid}/resumes"
    assert client.post(base).status_code == 422
    assert client.post(base).text == "Information missing"
    assert client.get(f"{base}/x1").status_code == 400
    assert client.put(f"{base}/99", json={"a": 1}).status_code == 404
    assert client.get(f"/jobseeker/{uuid.uuid4()}/resumes").status_code == 404


def test_oversized_ids_are_rejected(client, jobseeker_uid):
    huge = "99999999999999999999"
    resp = client.get(f"/jobseeker/{jobseeker_uid}/education/{huge}")
    assert resp.status_code == 400
    assert resp.text == "Invalid education ID"

    resp = client.get(f"/jobseeker/{jobseeker_uid}/resumes/{huge}")
    assert resp.status_code == 400

    resp = client.post(f"/jobseeker/{jobseeker_uid}/skill", json={"skill": "Go", "years": huge})
    assert resp.status_code == 400
    assert resp.text == "Invalid years"


def test_resume_auto_id_after_explicit_id(client, jobseeker_uid):
    base = f"/jobseeker/{jobseeker_uid}/resumes"
    assert client.post(f"{base}/1", json={"v": 1}).json()["resume_id"] == 1

    resp = client.post(base, json={"v": 2})
    assert resp.status_code == 200
    assert resp.json()["resume_id"] == 2


def test_resume_sequence_only_moved_on_postgres():
    session = MagicMock()
    advance_resume_sequence(session, "sqlite")
    session.execute.assert_not_called()

    advance_resume_sequence(session, "postgresql")
    statement = str(session.execute.call_args[0][0])
    assert "setval" in statement
    assert "pg_get_serial_sequence('resumes', 'resume_id')" in statement
