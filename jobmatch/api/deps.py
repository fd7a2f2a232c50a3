"""
Shared route dependencies and helpers.
"""

from fastapi import Path
from sqlalchemy import text
from sqlalchemy.orm import Session

from jobmatch.core.errors import NotFound
from jobmatch.db.postgres import Database
from jobmatch.utils.validators import clean_uid

JOBSEEKER_NOT_FOUND = "Jobseeker could not be found"


def valid_uid(uid: str = Path(..., description="UUID of the jobseeker or employer")) -> str:
    """Escape and check the {uid} path parameter before any query runs."""
    return clean_uid(uid)


def jobseeker_exists(db: Database, uid: str) -> bool:
    row = db.fetch_one("SELECT uid FROM jobseeker WHERE uid = :uid", {"uid": uid})
    return row is not None


def upsert_lookup(session: Session, table: str, column: str, value: str) -> int:
    """Find or create a row in a pre_* lookup table and return its id."""
    result = session.execute(
        text(f"""
            INSERT INTO {table} ({column}) VALUES (:value)
            ON CONFLICT ({column}) DO UPDATE SET {column} = EXCLUDED.{column}
            RETURNING id
        """),
        {"value": value}
    )
    return result.scalar_one()


def list_for_jobseeker(db: Database, uid: str, sql: str) -> list:
    """
    Run a per-jobseeker list query.

    An empty result is only an error when the jobseeker itself is absent.
    """
    rows = db.fetch_all(sql, {"uid": uid})
    if not rows and not jobseeker_exists(db, uid):
        raise NotFound(JOBSEEKER_NOT_FOUND)
    return rows
