"""
Resume Routes

GET /jobseeker/{uid}/resumes - Get all resume snapshots
GET /jobseeker/{uid}/resumes/{resume_id} - Get one snapshot
POST /jobseeker/{uid}/resumes[/{resume_id}] - Store a snapshot (id generated unless given)
PUT /jobseeker/{uid}/resumes/{resume_id} - Replace a snapshot (full JSON)
DELETE /jobseeker/{uid}/resumes/{resume_id} - Remove a snapshot

Resumes use their own status codes: 400 malformed input, 404 absent
jobseeker or resume, 422 missing snapshot body.
"""

import json
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from jobmatch.api.deps import JOBSEEKER_NOT_FOUND, jobseeker_exists, valid_uid
from jobmatch.core.errors import MissingInformation, NotFound
from jobmatch.db.postgres import Database, get_database
from jobmatch.utils.validators import clean_int

router = APIRouter(prefix="/jobseeker/{uid}/resumes", tags=["Jobseeker", "Resumes"])

RESUME_NOT_FOUND = "Resume could not be found"


def _decode(row: dict) -> dict:
    # JSONB comes back parsed, TEXT (sqlite) as a string
    if isinstance(row.get("snapshot"), str):
        row["snapshot"] = json.loads(row["snapshot"])
    return row


def _encode(snapshot: Any) -> str:
    if snapshot is None:
        raise MissingInformation("Information missing")
    return json.dumps(snapshot)


def advance_resume_sequence(session: Session, dialect: str) -> None:
    """Move the PostgreSQL serial past an explicitly chosen resume_id."""
    if dialect != "postgresql":
        return
    session.execute(text("""
        SELECT setval(
            pg_get_serial_sequence('resumes', 'resume_id'),
            (SELECT MAX(resume_id) FROM resumes)
        )
    """))


def _require_jobseeker(db: Database, uid: str) -> None:
    if not jobseeker_exists(db, uid):
        raise NotFound(JOBSEEKER_NOT_FOUND, status_code=404)


@router.get("")
def get_all_resumes(uid: str = Depends(valid_uid), db: Database = Depends(get_database)):
    _require_jobseeker(db, uid)
    rows = db.fetch_all("SELECT * FROM resumes WHERE uid = :uid ORDER BY resume_id", {"uid": uid})
    return [_decode(r) for r in rows]


@router.get("/{resume_id}")
def get_resume(resume_id: str, uid: str = Depends(valid_uid), db: Database = Depends(get_database)):
    row = db.fetch_one(
        "SELECT * FROM resumes WHERE uid = :uid AND resume_id = :resume_id",
        {"uid": uid, "resume_id": clean_int(resume_id, "resume ID")}
    )
    if not row:
        raise NotFound(RESUME_NOT_FOUND, status_code=404)
    return _decode(row)


@router.post("")
@router.post("/{resume_id}")
def create_resume(
    resume_id: Optional[str] = None,
    snapshot: Any = Body(None),
    uid: str = Depends(valid_uid),
    db: Database = Depends(get_database)
):
    """Store a resume snapshot for the jobseeker."""
    key = clean_int(resume_id, "resume ID") if resume_id is not None else None
    document = _encode(snapshot)
    _require_jobseeker(db, uid)

    if key is None:
        row = db.fetch_one(
            "INSERT INTO resumes (uid, snapshot) VALUES (:uid, :snapshot) RETURNING *",
            {"uid": uid, "snapshot": document}
        )
        return _decode(row)

    with db.session() as session:
        result = session.execute(
            text("""
                INSERT INTO resumes (resume_id, uid, snapshot)
                VALUES (:resume_id, :uid, :snapshot)
                RETURNING *
            """),
            {"resume_id": key, "uid": uid, "snapshot": document}
        )
        row = dict(result.mappings().one())
        advance_resume_sequence(session, db.dialect)
    return _decode(row)


@router.put("/{resume_id}")
def update_resume(
    resume_id: str,
    snapshot: Any = Body(None),
    uid: str = Depends(valid_uid),
    db: Database = Depends(get_database)
):
    """Replace the whole snapshot document."""
    key = clean_int(resume_id, "resume ID")
    row = db.fetch_one(
        """
        UPDATE resumes SET snapshot = :snapshot
        WHERE uid = :uid AND resume_id = :resume_id
        RETURNING *
        """,
        {"uid": uid, "resume_id": key, "snapshot": _encode(snapshot)}
    )
    if not row:
        raise NotFound(RESUME_NOT_FOUND, status_code=404)
    return _decode(row)


@router.delete("/{resume_id}", response_class=PlainTextResponse)
def delete_resume(resume_id: str, uid: str = Depends(valid_uid), db: Database = Depends(get_database)):
    row = db.fetch_one(
        "DELETE FROM resumes WHERE uid = :uid AND resume_id = :resume_id RETURNING resume_id",
        {"uid": uid, "resume_id": clean_int(resume_id, "resume ID")}
    )
    if not row:
        raise NotFound(RESUME_NOT_FOUND, status_code=404)
    return "Deleted resume"
