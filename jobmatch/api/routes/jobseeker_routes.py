"""
Jobseeker Routes

GET /jobseeker - List jobseekers
POST /jobseeker - Create jobseeker (firebaseID, name, email)
GET /jobseeker/{uid} - Get jobseeker row
PUT /jobseeker/{uid} - Update jobseeker fields (field mask)
"""

import uuid
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from fastapi.responses import PlainTextResponse
from loguru import logger

from jobmatch.api.deps import valid_uid
from jobmatch.core.auth import verify_token
from jobmatch.core.errors import NotFound
from jobmatch.db.postgres import Database, get_database
from jobmatch.schemas.schemas import (
    FieldMask, JobseekerCreate, EMAIL_COLUMNS,
    JOBSEEKER_MUTABLE, JOBSEEKER_NUMERIC, JOBSEEKER_BOOLEAN
)
from jobmatch.utils.validators import clean_email, escape, require_fields

router = APIRouter(prefix="/jobseeker", tags=["Jobseeker"])


@router.get("")
def list_jobseekers(db: Database = Depends(get_database)):
    """Get every jobseeker row."""
    return db.fetch_all("SELECT * FROM jobseeker ORDER BY name")


@router.post("", response_class=PlainTextResponse)
def create_jobseeker(data: JobseekerCreate, db: Database = Depends(get_database)):
    """Create a jobseeker account. Responds with the generated uid."""
    firebase_id = escape(data.firebaseID)
    name = escape(data.name)
    email = escape(data.email)
    require_fields(firebase_id, name, email)
    email = clean_email(email)

    row = db.fetch_one(
        """
        INSERT INTO jobseeker (uid, fb_id, name, email_address)
        VALUES (:uid, :fb_id, :name, :email)
        RETURNING uid
        """,
        {"uid": str(uuid.uuid4()), "fb_id": firebase_id, "name": name, "email": email}
    )
    if not row or not row.get("uid"):
        raise NotFound("Jobseeker could not be created")

    logger.info(f"Jobseeker {row['uid']} created")
    return f"Jobseeker created with ID: {row['uid']}"


@router.get("/{uid}", dependencies=[Depends(verify_token)])
def get_jobseeker(uid: str = Depends(valid_uid), db: Database = Depends(get_database)):
    """Get the full jobseeker row."""
    row = db.fetch_one("SELECT * FROM jobseeker WHERE uid = :uid", {"uid": uid})
    if not row:
        raise NotFound("jobseeker could not be found")
    return row


@router.put("/{uid}")
def update_jobseeker(
    uid: str = Depends(valid_uid),
    data: Dict[str, Any] = Body(...),
    db: Database = Depends(get_database)
):
    """
    Update jobseeker columns.

    Every key present in the body is written; absent keys keep their value.
    uid and firebaseID are ignored, unknown keys are rejected.
    """
    mask = FieldMask.build(
        data, JOBSEEKER_MUTABLE,
        numeric=JOBSEEKER_NUMERIC, emails=EMAIL_COLUMNS, booleans=JOBSEEKER_BOOLEAN
    )
    row = db.fetch_one(
        f"UPDATE jobseeker SET {mask.assignments()} WHERE uid = :uid RETURNING uid",
        {**mask.values, "uid": uid}
    )
    if not row:
        raise NotFound("Jobseeker could not be updated")
    return row
