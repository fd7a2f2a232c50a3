"""
Dream Career Routes

GET /jobseeker/{uid}/dream_career - Get dream careers
POST /jobseeker/{uid}/dream_career - Add a dream career
DELETE /jobseeker/{uid}/dream_career/{dream_career} - Remove a dream career

Unlike skills and dream companies, a DELETE without a path segment reads
the career from the 'dream_career' request header, not the body.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from sqlalchemy import text

from jobmatch.api.deps import list_for_jobseeker, upsert_lookup, valid_uid
from jobmatch.core.errors import NotFound
from jobmatch.db.postgres import Database, get_database
from jobmatch.schemas.schemas import DreamCareerAdd
from jobmatch.utils.validators import clean_optional_int, escape, require_fields

router = APIRouter(prefix="/jobseeker/{uid}/dream_career", tags=["Jobseeker", "Dream careers"])


@router.get("")
def get_dream_careers(uid: str = Depends(valid_uid), db: Database = Depends(get_database)):
    return list_for_jobseeker(db, uid, """
        SELECT dc.uid, pdc.career AS dream_career, dc.ranking
        FROM dream_careers dc JOIN pre_dream_careers pdc ON pdc.id = dc.career_id
        WHERE dc.uid = :uid ORDER BY dc.ranking, pdc.career
    """)


@router.post("", response_class=PlainTextResponse)
@router.post("/{dream_career}", response_class=PlainTextResponse)
def add_dream_career(
    data: Optional[DreamCareerAdd] = None,
    dream_career: Optional[str] = None,
    uid: str = Depends(valid_uid),
    db: Database = Depends(get_database)
):
    """Add a dream career; re-adding an existing one updates its ranking."""
    data = data or DreamCareerAdd()
    career = escape(dream_career if dream_career is not None else data.dream_career)
    require_fields(career)
    ranking = clean_optional_int(data.ranking, "ranking") or 0

    with db.session() as session:
        career_id = upsert_lookup(session, "pre_dream_careers", "career", career)
        result = session.execute(
            text("""
                INSERT INTO dream_careers (uid, career_id, ranking)
                VALUES (:uid, :career_id, :ranking)
                ON CONFLICT (uid, career_id) DO UPDATE SET ranking = EXCLUDED.ranking
                RETURNING uid
            """),
            {"uid": uid, "career_id": career_id, "ranking": ranking}
        )
        row = result.fetchone()

    if not row:
        raise NotFound("Jobseeker could not be found")
    return "Added dream career"


@router.delete("")
@router.delete("/{dream_career}")
def delete_dream_career(
    request: Request,
    dream_career: Optional[str] = None,
    uid: str = Depends(valid_uid),
    db: Database = Depends(get_database)
):
    """Remove a dream career. Path segment first, then the 'dream_career' header."""
    raw = dream_career if dream_career is not None else request.headers.get("dream_career")
    career = escape(raw)
    require_fields(career)

    row = db.fetch_one(
        """
        DELETE FROM dream_careers
        WHERE uid = :uid AND career_id IN (SELECT id FROM pre_dream_careers WHERE career = :career)
        RETURNING uid, career_id
        """,
        {"uid": uid, "career": career}
    )
    if not row:
        raise NotFound("Dream career could not be found")
    return row
