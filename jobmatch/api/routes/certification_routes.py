"""
Certification Routes

POST /jobseeker/{uid}/certification - Add a certification
GET /jobseeker/{uid}/certification - Get certifications
GET /jobseeker/{uid}/certification/{c_id} - Get one certification
PUT /jobseeker/{uid}/certification/{c_id} - Replace a certification
DELETE /jobseeker/{uid}/certification/{c_id} - Remove a certification
"""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from jobmatch.api.deps import list_for_jobseeker, valid_uid
from jobmatch.core.errors import NotFound
from jobmatch.db.postgres import Database, get_database
from jobmatch.schemas.schemas import CertificationBody, SecondaryKeyBody
from jobmatch.utils.validators import clean_date, clean_int, escape, require_fields

router = APIRouter(prefix="/jobseeker/{uid}/certification", tags=["Jobseeker", "Certification"])

NOT_FOUND = "Certification could not be found"


def _fields(data: CertificationBody) -> dict:
    cert_name = escape(data.cert_name)
    issuer = escape(data.issuer)
    require_fields(cert_name, escape(data.start_date), escape(data.end_date), issuer)
    return {
        "cert_name": cert_name,
        "start_date": clean_date(data.start_date, "start date"),
        "end_date": clean_date(data.end_date, "end date"),
        "issuer": issuer,
    }


@router.post("", response_class=PlainTextResponse)
def add_certification(
    data: CertificationBody,
    uid: str = Depends(valid_uid),
    db: Database = Depends(get_database)
):
    row = db.fetch_one(
        """
        INSERT INTO certification (uid, cert_name, start_date, end_date, issuer)
        VALUES (:uid, :cert_name, :start_date, :end_date, :issuer)
        RETURNING c_id
        """,
        {"uid": uid, **_fields(data)}
    )
    if not row:
        raise NotFound("Jobseeker could not be found")
    return "Added certification"


@router.get("")
def get_certifications(uid: str = Depends(valid_uid), db: Database = Depends(get_database)):
    return list_for_jobseeker(
        db, uid, "SELECT * FROM certification WHERE uid = :uid ORDER BY start_date DESC, c_id"
    )


@router.get("/{c_id}")
def get_certification(c_id: str, uid: str = Depends(valid_uid), db: Database = Depends(get_database)):
    row = db.fetch_one(
        "SELECT * FROM certification WHERE uid = :uid AND c_id = :c_id",
        {"uid": uid, "c_id": clean_int(c_id, "certification ID")}
    )
    if not row:
        raise NotFound(NOT_FOUND)
    return row


@router.put("")
@router.put("/{c_id}")
def update_certification(
    data: CertificationBody,
    c_id: Optional[str] = None,
    uid: str = Depends(valid_uid),
    db: Database = Depends(get_database)
):
    """Full-row replace. c_id comes from the path, else the body."""
    key = clean_int(c_id if c_id is not None else data.c_id, "certification ID")
    row = db.fetch_one(
        """
        UPDATE certification
        SET cert_name = :cert_name, start_date = :start_date, end_date = :end_date, issuer = :issuer
        WHERE uid = :uid AND c_id = :c_id
        RETURNING *
        """,
        {"uid": uid, "c_id": key, **_fields(data)}
    )
    if not row:
        raise NotFound(NOT_FOUND)
    return row


@router.delete("", response_class=PlainTextResponse)
@router.delete("/{c_id}", response_class=PlainTextResponse)
def delete_certification(
    c_id: Optional[str] = None,
    data: Optional[SecondaryKeyBody] = None,
    uid: str = Depends(valid_uid),
    db: Database = Depends(get_database)
):
    key = clean_int(c_id if c_id is not None else (data.c_id if data else None), "certification ID")
    row = db.fetch_one(
        "DELETE FROM certification WHERE uid = :uid AND c_id = :c_id RETURNING c_id",
        {"uid": uid, "c_id": key}
    )
    if not row:
        raise NotFound(NOT_FOUND)
    return "Deleted certification"
