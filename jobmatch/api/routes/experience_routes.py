"""
Experience Routes

GET /jobseeker/{uid}/exp - Get work experiences
GET /jobseeker/{uid}/exp/{exp_id} - Get one experience
POST /jobseeker/{uid}/exp - Add an experience
PUT /jobseeker/{uid}/exp/{exp_id} - Replace an experience (all fields required)
DELETE /jobseeker/{uid}/exp/{exp_id} - Remove an experience
"""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from jobmatch.api.deps import list_for_jobseeker, valid_uid
from jobmatch.core.errors import NotFound
from jobmatch.db.postgres import Database, get_database
from jobmatch.schemas.schemas import ExperienceBody, SecondaryKeyBody
from jobmatch.utils.validators import clean_date, clean_int, escape, require_fields

router = APIRouter(prefix="/jobseeker/{uid}/exp", tags=["Jobseeker", "Experiences"])

NOT_FOUND = "Experience could not be found"


def _fields(data: ExperienceBody) -> dict:
    title = escape(data.title)
    description = escape(data.description)
    require_fields(title, escape(data.start_date), escape(data.end_date), description)
    return {
        "title": title,
        "start_date": clean_date(data.start_date, "start date"),
        "end_date": clean_date(data.end_date, "end date"),
        "description": description,
    }


@router.get("")
def get_experiences(uid: str = Depends(valid_uid), db: Database = Depends(get_database)):
    return list_for_jobseeker(
        db, uid, "SELECT * FROM experiences WHERE uid = :uid ORDER BY start_date DESC, exp_id"
    )


@router.get("/{exp_id}")
def get_experience(exp_id: str, uid: str = Depends(valid_uid), db: Database = Depends(get_database)):
    row = db.fetch_one(
        "SELECT * FROM experiences WHERE uid = :uid AND exp_id = :exp_id",
        {"uid": uid, "exp_id": clean_int(exp_id, "experience ID")}
    )
    if not row:
        raise NotFound(NOT_FOUND)
    return row


@router.post("", response_class=PlainTextResponse)
def add_experience(
    data: ExperienceBody,
    uid: str = Depends(valid_uid),
    db: Database = Depends(get_database)
):
    params = {"uid": uid, **_fields(data)}
    row = db.fetch_one(
        """
        INSERT INTO experiences (uid, title, start_date, end_date, description)
        VALUES (:uid, :title, :start_date, :end_date, :description)
        RETURNING exp_id
        """,
        params
    )
    if not row:
        raise NotFound("Jobseeker could not be found")
    return "Added job experience"


@router.put("")
@router.put("/{exp_id}")
def update_experience(
    data: ExperienceBody,
    exp_id: Optional[str] = None,
    uid: str = Depends(valid_uid),
    db: Database = Depends(get_database)
):
    """Replace every column of one experience. exp_id comes from the path, else the body."""
    key = clean_int(exp_id if exp_id is not None else data.exp_id, "experience ID")
    params = {"uid": uid, "exp_id": key, **_fields(data)}
    row = db.fetch_one(
        """
        UPDATE experiences
        SET title = :title, start_date = :start_date, end_date = :end_date, description = :description
        WHERE uid = :uid AND exp_id = :exp_id
        RETURNING *
        """,
        params
    )
    if not row:
        raise NotFound(NOT_FOUND)
    return row


@router.delete("", response_class=PlainTextResponse)
@router.delete("/{exp_id}", response_class=PlainTextResponse)
def delete_experience(
    exp_id: Optional[str] = None,
    data: Optional[SecondaryKeyBody] = None,
    uid: str = Depends(valid_uid),
    db: Database = Depends(get_database)
):
    key = clean_int(exp_id if exp_id is not None else (data.exp_id if data else None), "experience ID")
    row = db.fetch_one(
        "DELETE FROM experiences WHERE uid = :uid AND exp_id = :exp_id RETURNING exp_id",
        {"uid": uid, "exp_id": key}
    )
    if not row:
        raise NotFound(NOT_FOUND)
    return "Deleted job experience"
