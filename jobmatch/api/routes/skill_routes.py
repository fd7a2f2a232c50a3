"""
Skill Routes

GET /jobseeker/{uid}/skill - Get skills
GET /jobseeker/{uid}/skill/{skill} - Get one skill
POST /jobseeker/{uid}/skill - Add (or re-rank) a skill
DELETE /jobseeker/{uid}/skill/{skill} - Remove a skill (name from path or body)
"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy import text

from jobmatch.api.deps import list_for_jobseeker, upsert_lookup, valid_uid
from jobmatch.core.errors import NotFound
from jobmatch.db.postgres import Database, get_database
from jobmatch.schemas.schemas import SkillAdd, SkillDelete
from jobmatch.utils.validators import clean_optional_int, escape, require_fields

router = APIRouter(prefix="/jobseeker/{uid}/skill", tags=["Jobseeker", "Skills"])

SKILLS_SQL = """
    SELECT s.uid, ps.skill, s.ranking, s.level, s.years
    FROM skills s JOIN pre_skills ps ON ps.id = s.skill_id
    WHERE s.uid = :uid
"""


@router.get("")
def get_skills(uid: str = Depends(valid_uid), db: Database = Depends(get_database)):
    """Get all skills of a jobseeker, best ranked first."""
    return list_for_jobseeker(db, uid, SKILLS_SQL + " ORDER BY s.ranking, ps.skill")


@router.get("/{skill}")
def get_skill(skill: str, uid: str = Depends(valid_uid), db: Database = Depends(get_database)):
    skill = escape(skill)
    rows = db.fetch_all(SKILLS_SQL + " AND ps.skill = :skill", {"uid": uid, "skill": skill})
    if not rows:
        raise NotFound("Skill could not be found")
    return rows


@router.post("")
@router.post("/{skill}")
def add_skill(
    data: Optional[SkillAdd] = None,
    skill: Optional[str] = None,
    uid: str = Depends(valid_uid),
    db: Database = Depends(get_database)
):
    """Add a skill to the profile. Creates the skill name if it doesn't exist."""
    data = data or SkillAdd()
    name = escape(skill if skill is not None else data.skill)
    require_fields(name)
    ranking = clean_optional_int(data.ranking, "ranking") or 0
    level = clean_optional_int(data.level, "level")
    years = clean_optional_int(data.years, "years")

    with db.session() as session:
        skill_id = upsert_lookup(session, "pre_skills", "skill", name)
        result = session.execute(
            text("""
                INSERT INTO skills (uid, skill_id, ranking, level, years)
                VALUES (:uid, :skill_id, :ranking, :level, :years)
                ON CONFLICT (uid, skill_id) DO UPDATE
                SET ranking = EXCLUDED.ranking, level = EXCLUDED.level, years = EXCLUDED.years
                RETURNING uid
            """),
            {"uid": uid, "skill_id": skill_id, "ranking": ranking, "level": level, "years": years}
        )
        rows = [dict(r) for r in result.mappings().all()]

    if not rows:
        raise NotFound("Jobseeker could not be found")
    return rows


@router.delete("")
@router.delete("/{skill}")
def delete_skill(
    skill: Optional[str] = None,
    data: Optional[SkillDelete] = None,
    uid: str = Depends(valid_uid),
    db: Database = Depends(get_database)
):
    """Remove a skill. The path segment wins over the body's 'skill' field."""
    name = escape(skill if skill is not None else (data.skill if data else None))
    require_fields(name)

    rows = db.fetch_all(
        """
        DELETE FROM skills
        WHERE uid = :uid AND skill_id IN (SELECT id FROM pre_skills WHERE skill = :skill)
        RETURNING uid, skill_id
        """,
        {"uid": uid, "skill": name}
    )
    if not rows:
        raise NotFound("Skill could not be found")
    return rows
