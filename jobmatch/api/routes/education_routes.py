"""
Education Routes

POST /jobseeker/{uid}/education - Add an education entry
GET /jobseeker/{uid}/education - Get education entries
GET /jobseeker/{uid}/education/{ed_id} - Get one entry
PUT /jobseeker/{uid}/education/{ed_id} - Replace an entry (all fields required)
DELETE /jobseeker/{uid}/education/{ed_id} - Remove an entry
"""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from jobmatch.api.deps import list_for_jobseeker, valid_uid
from jobmatch.core.errors import NotFound
from jobmatch.db.postgres import Database, get_database
from jobmatch.schemas.schemas import EducationBody, SecondaryKeyBody
from jobmatch.utils.validators import clean_date, clean_int, escape, require_fields

router = APIRouter(prefix="/jobseeker/{uid}/education", tags=["Jobseeker", "Education"])

NOT_FOUND = "Education could not be found"


def _fields(data: EducationBody) -> dict:
    school_name = escape(data.school_name)
    program = escape(data.program)
    require_fields(school_name, escape(data.start_date), escape(data.grad_date), program)
    return {
        "school_name": school_name,
        "start_date": clean_date(data.start_date, "start date"),
        "grad_date": clean_date(data.grad_date, "graduation date"),
        "program": program,
    }


@router.post("", response_class=PlainTextResponse)
def add_education(
    data: EducationBody,
    uid: str = Depends(valid_uid),
    db: Database = Depends(get_database)
):
    """Add a school/program to the jobseeker."""
    row = db.fetch_one(
        """
        INSERT INTO education (uid, school_name, start_date, grad_date, program)
        VALUES (:uid, :school_name, :start_date, :grad_date, :program)
        RETURNING ed_id
        """,
        {"uid": uid, **_fields(data)}
    )
    if not row:
        raise NotFound("Jobseeker could not be found")
    return "Added education"


@router.get("")
def get_education(uid: str = Depends(valid_uid), db: Database = Depends(get_database)):
    return list_for_jobseeker(
        db, uid, "SELECT * FROM education WHERE uid = :uid ORDER BY grad_date DESC, ed_id"
    )


@router.get("/{ed_id}")
def get_education_entry(ed_id: str, uid: str = Depends(valid_uid), db: Database = Depends(get_database)):
    row = db.fetch_one(
        "SELECT * FROM education WHERE uid = :uid AND ed_id = :ed_id",
        {"uid": uid, "ed_id": clean_int(ed_id, "education ID")}
    )
    if not row:
        raise NotFound(NOT_FOUND)
    return row


@router.put("")
@router.put("/{ed_id}")
def update_education(
    data: EducationBody,
    ed_id: Optional[str] = None,
    uid: str = Depends(valid_uid),
    db: Database = Depends(get_database)
):
    """Full-row replace. ed_id comes from the path, else the body."""
    key = clean_int(ed_id if ed_id is not None else data.ed_id, "education ID")
    row = db.fetch_one(
        """
        UPDATE education
        SET school_name = :school_name, start_date = :start_date, grad_date = :grad_date, program = :program
        WHERE uid = :uid AND ed_id = :ed_id
        RETURNING *
        """,
        {"uid": uid, "ed_id": key, **_fields(data)}
    )
    if not row:
        raise NotFound(NOT_FOUND)
    return row


@router.delete("", response_class=PlainTextResponse)
@router.delete("/{ed_id}", response_class=PlainTextResponse)
def delete_education(
    ed_id: Optional[str] = None,
    data: Optional[SecondaryKeyBody] = None,
    uid: str = Depends(valid_uid),
    db: Database = Depends(get_database)
):
    key = clean_int(ed_id if ed_id is not None else (data.ed_id if data else None), "education ID")
    row = db.fetch_one(
        "DELETE FROM education WHERE uid = :uid AND ed_id = :ed_id RETURNING ed_id",
        {"uid": uid, "ed_id": key}
    )
    if not row:
        raise NotFound(NOT_FOUND)
    return "Deleted education"
