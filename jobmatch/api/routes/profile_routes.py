"""
Profile Route

GET /jobseeker/{uid}/profile - Whole jobseeker profile in one document

Seven reads run concurrently, each on its own pooled connection, and the
results are reassembled as:

    {"jobseeker": {"uid": ..., "info": {<scalar fields>,
        "skills": [...], "dream_career": [...], "dream_company": [...],
        "experiences": [...], "certification": [...], "education": [...]}}}
"""

import asyncio
from typing import Dict, List

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from jobmatch.api.deps import JOBSEEKER_NOT_FOUND, valid_uid
from jobmatch.core.errors import NotFound
from jobmatch.db.postgres import Database, get_database

router = APIRouter(prefix="/jobseeker/{uid}/profile", tags=["Jobseeker", "Profile"])

JOBSEEKER_SQL = """
    SELECT uid, acceptance_wage, goal_wage, open_relocation
    FROM jobseeker WHERE uid = :uid
"""

# section name -> query; order is the order of the response keys
SECTION_QUERIES = {
    "skills": """
        SELECT ps.skill, s.years, s.level
        FROM skills s JOIN pre_skills ps ON ps.id = s.skill_id
        WHERE s.uid = :uid ORDER BY s.ranking, ps.skill
    """,
    "dream_career": """
        SELECT pdc.career AS dream_career
        FROM dream_careers dc JOIN pre_dream_careers pdc ON pdc.id = dc.career_id
        WHERE dc.uid = :uid ORDER BY dc.ranking, pdc.career
    """,
    "dream_company": """
        SELECT pdc.company AS dream_company
        FROM dream_companies dc JOIN pre_dream_companies pdc ON pdc.id = dc.company_id
        WHERE dc.uid = :uid ORDER BY dc.preference, pdc.company
    """,
    "experiences": "SELECT * FROM experiences WHERE uid = :uid ORDER BY start_date DESC, exp_id",
    "certification": "SELECT * FROM certification WHERE uid = :uid ORDER BY start_date DESC, c_id",
    "education": "SELECT * FROM education WHERE uid = :uid ORDER BY grad_date DESC, ed_id",
}

# Sections rendered as a flat list of the named column
FLATTENED = {"dream_career", "dream_company"}


def build_profile(jobseeker: dict, sections: Dict[str, List[dict]]) -> dict:
    """Reshape the core row and the section rows into the profile document."""
    info = {key: value for key, value in jobseeker.items() if key != "uid"}
    for name, rows in sections.items():
        if name in FLATTENED:
            info[name] = [row[name] for row in rows]
        else:
            info[name] = [{k: v for k, v in row.items() if k != "uid"} for row in rows]
    return {"jobseeker": {"uid": jobseeker["uid"], "info": info}}


@router.get("")
async def get_profile(uid: str = Depends(valid_uid), db: Database = Depends(get_database)):
    """Aggregate the jobseeker row with all six sub-sections."""
    params = {"uid": uid}
    core, *section_rows = await asyncio.gather(
        run_in_threadpool(db.fetch_one, JOBSEEKER_SQL, params),
        *(run_in_threadpool(db.fetch_all, sql, params) for sql in SECTION_QUERIES.values())
    )
    if core is None:
        raise NotFound(JOBSEEKER_NOT_FOUND, status_code=404)

    return build_profile(core, dict(zip(SECTION_QUERIES, section_rows)))
