import uuid

import pytest

from tests.conftest import create_jobseeker


def test_create_and_get_jobseeker(client):
    uid = create_jobseeker(client, name="Grace", email="grace@jobmatch.io", firebase_id="fb-grace")

    resp = client.get(f"/jobseeker/{uid}")
    assert resp.status_code == 200
    row = resp.json()
    assert row["uid"] == uid
    assert row["fb_id"] == "fb-grace"
    assert row["email_address"] == "grace@jobmatch.io"


def test_create_jobseeker_rejects_bad_email_without_insert(client):
    resp = client.post("/jobseeker", json={"firebaseID": "fb-1", "name": "Ada", "email": "not-an-email"})
    assert resp.status_code == 400
    assert resp.text == "Invalid email address"
    assert client.get("/jobseeker").json() == []


@pytest.mark.parametrize("body", [
    {"name": "Ada", "email": "ada@jobmatch.io"},
    {"firebaseID": "fb", "name": "", "email": "ada@jobmatch.io"},
    {},
])
def test_create_jobseeker_requires_all_fields(client, body):
    resp = client.post("/jobseeker", json=body)
    assert resp.status_code == 400
    assert resp.text == "One of the field is empty"


def test_create_jobseeker_escapes_input(client):
    uid = create_jobseeker(client, name="<Ada>")
    assert client.get(f"/jobseeker/{uid}").json()["name"] == "&lt;Ada&gt;"


def test_duplicate_firebase_id_is_rejected(client):
    create_jobseeker(client, firebase_id="fb-same")
    resp = client.post("/jobseeker", json={"firebaseID": "fb-same", "name": "B", "email": "b@jobmatch.io"})
    assert resp.status_code == 400
    assert resp.text == "Entry already exists"


def test_get_jobseeker_by_uppercase_uid(client, jobseeker_uid):
    resp = client.get(f"/jobseeker/{jobseeker_uid.upper()}")
    assert resp.status_code == 200
    assert resp.json()["uid"] == jobseeker_uid


def test_get_unknown_jobseeker_is_400(client):
    resp = client.get(f"/jobseeker/{uuid.uuid4()}")
    assert resp.status_code == 400
    assert resp.text == "jobseeker could not be found"


def test_update_jobseeker_sets_present_fields_only(client, jobseeker_uid):
    resp = client.put(f"/jobseeker/{jobseeker_uid}", json={
        "uid": "ignored",
        "firebaseID": "ignored",
        "location": "Toronto",
        "goal_wage": 95000,
        "open_relocation": True,
    })
    assert resp.status_code == 200
    assert resp.json() == {"uid": jobseeker_uid}

    row = client.get(f"/jobseeker/{jobseeker_uid}").json()
    assert row["location"] == "Toronto"
    assert row["goal_wage"] == 95000
    assert bool(row["open_relocation"]) is True
    assert row["name"] == "Ada"
    assert row["fb_id"] != "ignored"


def test_update_jobseeker_rejects_unknown_column(client, jobseeker_uid):
    resp = client.put(f"/jobseeker/{jobseeker_uid}", json={"name = 'x'; --": "y"})
    assert resp.status_code == 400
    assert resp.text.startswith("Invalid field")


def test_update_missing_jobseeker(client):
    resp = client.put(f"/jobseeker/{uuid.uuid4()}", json={"location": "Paris"})
    assert resp.status_code == 400
    assert resp.text == "Jobseeker could not be updated"


def test_create_and_update_employer(client):
    resp = client.post("/employer", json={
        "firebaseID": "fb-emp", "name": "Linus", "email": "linus@jobmatch.io", "company": "12",
    })
    assert resp.status_code == 200
    uid = resp.text.split(": ")[1]

    row = client.get(f"/employer/{uid}").json()
    assert row["company_id"] == 12

    resp = client.put(f"/employer/{uid}", json={"company_id": 13})
    assert resp.status_code == 200
    assert client.get(f"/employer/{uid}").json()["company_id"] == 13
    # employer updates never leak into the jobseeker table
    assert client.get("/jobseeker").json() == []


@pytest.mark.parametrize("overrides, message", [
    ({"email": "nope"}, "Invalid email address"),
    ({"name": "Linus T"}, "Invalid name"),
    ({"company": "acme"}, "Invalid company ID"),
    ({"company": ""}, "One of the field is empty"),
])
def test_create_employer_validation(client, overrides, message):
    body = {"firebaseID": "fb-emp", "name": "Linus", "email": "linus@jobmatch.io", "company": "12"}
    body.update(overrides)
    resp = client.post("/employer", json=body)
    assert resp.status_code == 400
    assert resp.text == message


def test_init_resolves_user_type(client):
    create_jobseeker(client, firebase_id="fb-js")
    client.post("/employer", json={
        "firebaseID": "fb-em", "name": "Linus", "email": "linus@jobmatch.io", "company": 3,
    })

    resp = client.post("/init", json={"firebaseID": "fb-js"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["status_code"] == 200
    assert body["payload"]["user_type"] == "jobseeker"

    resp = client.post("/init", json={"firebaseID": "fb-em"})
    assert resp.json()["payload"]["user_type"] == "employer"


def test_init_unknown_user_is_404_envelope(client):
    resp = client.post("/init", json={"firebaseID": "ghost"})
    assert resp.status_code == 404
    assert resp.json() == {
        "status_code": 404,
        "error": {
            "message": "User with firebaseID = ghost not found.",
            "additional_information": {},
        },
    }
