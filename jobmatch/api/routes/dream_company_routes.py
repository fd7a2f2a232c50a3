"""
Dream Company Routes

GET /jobseeker/{uid}/dream_company - Get dream companies
POST /jobseeker/{uid}/dream_company - Add a dream company
DELETE /jobseeker/{uid}/dream_company/{dream_company} - Remove a dream company (path or body)
"""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy import text

from jobmatch.api.deps import list_for_jobseeker, upsert_lookup, valid_uid
from jobmatch.core.errors import NotFound
from jobmatch.db.postgres import Database, get_database
from jobmatch.schemas.schemas import DreamCompanyAdd, DreamCompanyDelete
from jobmatch.utils.validators import clean_optional_int, escape, require_fields

router = APIRouter(prefix="/jobseeker/{uid}/dream_company", tags=["Jobseeker", "Dream companies"])


@router.get("")
def get_dream_companies(uid: str = Depends(valid_uid), db: Database = Depends(get_database)):
    return list_for_jobseeker(db, uid, """
        SELECT dc.uid, pdc.company AS dream_company, dc.preference
        FROM dream_companies dc JOIN pre_dream_companies pdc ON pdc.id = dc.company_id
        WHERE dc.uid = :uid ORDER BY dc.preference, pdc.company
    """)


@router.post("", response_class=PlainTextResponse)
@router.post("/{dream_company}", response_class=PlainTextResponse)
def add_dream_company(
    data: Optional[DreamCompanyAdd] = None,
    dream_company: Optional[str] = None,
    uid: str = Depends(valid_uid),
    db: Database = Depends(get_database)
):
    data = data or DreamCompanyAdd()
    company = escape(dream_company if dream_company is not None else data.dream_company)
    require_fields(company)
    preference = clean_optional_int(data.preference, "preference") or 0

    with db.session() as session:
        company_id = upsert_lookup(session, "pre_dream_companies", "company", company)
        result = session.execute(
            text("""
                INSERT INTO dream_companies (uid, company_id, preference)
                VALUES (:uid, :company_id, :preference)
                ON CONFLICT (uid, company_id) DO UPDATE SET preference = EXCLUDED.preference
                RETURNING uid
            """),
            {"uid": uid, "company_id": company_id, "preference": preference}
        )
        row = result.fetchone()

    if not row:
        raise NotFound("Jobseeker could not be found")
    return "Added dream company"


@router.delete("")
@router.delete("/{dream_company}")
def delete_dream_company(
    dream_company: Optional[str] = None,
    data: Optional[DreamCompanyDelete] = None,
    uid: str = Depends(valid_uid),
    db: Database = Depends(get_database)
):
    """Remove a dream company. Path segment first, then the body's 'dream_company'."""
    raw = dream_company if dream_company is not None else (data.dream_company if data else None)
    company = escape(raw)
    require_fields(company)

    rows = db.fetch_all(
        """
        DELETE FROM dream_companies
        WHERE uid = :uid AND company_id IN (SELECT id FROM pre_dream_companies WHERE company = :company)
        RETURNING uid, company_id
        """,
        {"uid": uid, "company": company}
    )
    if not rows:
        raise NotFound("Dream company could not be found")
    return rows
