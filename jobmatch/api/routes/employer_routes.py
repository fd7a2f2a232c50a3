"""
Employer Routes

GET /employer - List employers
POST /employer - Create employer (firebaseID, name, email, company)
GET /employer/{uid} - Get employer row
PUT /employer/{uid} - Update employer fields (field mask)
"""

import uuid
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from fastapi.responses import PlainTextResponse
from loguru import logger

from jobmatch.api.deps import valid_uid
from jobmatch.core.errors import InvalidInput, NotFound
from jobmatch.db.postgres import Database, get_database
from jobmatch.schemas.schemas import (
    FieldMask, EmployerCreate, EMAIL_COLUMNS, EMPLOYER_MUTABLE, EMPLOYER_NUMERIC
)
from jobmatch.utils.validators import escape, is_alpha, is_email, is_numeric, require_fields

router = APIRouter(prefix="/employer", tags=["Employer"])


@router.get("")
def list_employers(db: Database = Depends(get_database)):
    """Get every employer row."""
    return db.fetch_all("SELECT * FROM employer ORDER BY name")


@router.post("", response_class=PlainTextResponse)
def create_employer(data: EmployerCreate, db: Database = Depends(get_database)):
    """Create an employer account linked to a company."""
    firebase_id = escape(data.firebaseID)
    name = escape(data.name)
    email = escape(data.email)
    company = escape(data.company)
    require_fields(firebase_id, name, email, company)

    if not is_email(email):
        raise InvalidInput("Invalid email address")
    if not is_alpha(name):
        raise InvalidInput("Invalid name")
    if not is_numeric(company) or "." in company:
        raise InvalidInput("Invalid company ID")

    row = db.fetch_one(
        """
        INSERT INTO employer (uid, fb_id, name, email_address, company_id)
        VALUES (:uid, :fb_id, :name, :email, :company_id)
        RETURNING uid
        """,
        {
            "uid": str(uuid.uuid4()),
            "fb_id": firebase_id,
            "name": name,
            "email": email,
            "company_id": int(company)
        }
    )
    if not row or not row.get("uid"):
        raise NotFound("Employer could not be created")

    logger.info(f"Employer {row['uid']} created")
    return f"Employer created with ID: {row['uid']}"


@router.get("/{uid}")
def get_employer(uid: str = Depends(valid_uid), db: Database = Depends(get_database)):
    row = db.fetch_one("SELECT * FROM employer WHERE uid = :uid", {"uid": uid})
    if not row:
        raise NotFound("employer could not be found")
    return row


@router.put("/{uid}")
def update_employer(
    uid: str = Depends(valid_uid),
    data: Dict[str, Any] = Body(...),
    db: Database = Depends(get_database)
):
    """Update employer columns; same field-mask rules as jobseekers."""
    mask = FieldMask.build(data, EMPLOYER_MUTABLE, numeric=EMPLOYER_NUMERIC, emails=EMAIL_COLUMNS)
    if "name" in mask.values and not is_alpha(mask.values["name"] or ""):
        raise InvalidInput("Invalid name")

    row = db.fetch_one(
        f"UPDATE employer SET {mask.assignments()} WHERE uid = :uid RETURNING uid",
        {**mask.values, "uid": uid}
    )
    if not row:
        raise NotFound("Employer could not be updated")
    return row
