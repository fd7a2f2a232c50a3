"""
Relational schema for the jobmatch store.

The DDL is written once with two placeholders so the same statements run on
PostgreSQL (production) and SQLite (local runs and the test suite):

    {serial}  auto-incrementing integer primary key
    {json}    JSON document column

Foreign keys carry the "row belongs to an existing jobseeker" invariant;
handlers never check it themselves.
"""

from typing import List

from loguru import logger
from sqlalchemy import text

from jobmatch.db.postgres import Database

TYPE_MAP = {
    "postgresql": {"serial": "SERIAL PRIMARY KEY", "json": "JSONB"},
    "sqlite": {"serial": "INTEGER PRIMARY KEY AUTOINCREMENT", "json": "TEXT"},
}

TABLES = [
    """
    CREATE TABLE IF NOT EXISTS jobseeker (
        uid VARCHAR(36) PRIMARY KEY,
        fb_id VARCHAR(128) NOT NULL UNIQUE,
        name VARCHAR(200) NOT NULL,
        email_address VARCHAR(320) NOT NULL,
        phone_number VARCHAR(32),
        location VARCHAR(200),
        acceptance_wage NUMERIC,
        goal_wage NUMERIC,
        open_relocation BOOLEAN DEFAULT FALSE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS employer (
        uid VARCHAR(36) PRIMARY KEY,
        fb_id VARCHAR(128) NOT NULL UNIQUE,
        name VARCHAR(200) NOT NULL,
        email_address VARCHAR(320) NOT NULL,
        company_id INTEGER NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS pre_skills (
        id {serial},
        skill VARCHAR(200) NOT NULL UNIQUE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS skills (
        uid VARCHAR(36) NOT NULL REFERENCES jobseeker(uid) ON DELETE CASCADE,
        skill_id INTEGER NOT NULL REFERENCES pre_skills(id),
        ranking INTEGER DEFAULT 0,
        level INTEGER,
        years INTEGER,
        PRIMARY KEY (uid, skill_id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS pre_dream_careers (
        id {serial},
        career VARCHAR(200) NOT NULL UNIQUE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS dream_careers (
        uid VARCHAR(36) NOT NULL REFERENCES jobseeker(uid) ON DELETE CASCADE,
        career_id INTEGER NOT NULL REFERENCES pre_dream_careers(id),
        ranking INTEGER DEFAULT 0,
        PRIMARY KEY (uid, career_id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS pre_dream_companies (
        id {serial},
        company VARCHAR(200) NOT NULL UNIQUE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS dream_companies (
        uid VARCHAR(36) NOT NULL REFERENCES jobseeker(uid) ON DELETE CASCADE,
        company_id INTEGER NOT NULL REFERENCES pre_dream_companies(id),
        preference INTEGER DEFAULT 0,
        PRIMARY KEY (uid, company_id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS experiences (
        exp_id {serial},
        uid VARCHAR(36) NOT NULL REFERENCES jobseeker(uid) ON DELETE CASCADE,
        title VARCHAR(200) NOT NULL,
        start_date DATE NOT NULL,
        end_date DATE NOT NULL,
        description TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS education (
        ed_id {serial},
        uid VARCHAR(36) NOT NULL REFERENCES jobseeker(uid) ON DELETE CASCADE,
        school_name VARCHAR(200) NOT NULL,
        start_date DATE NOT NULL,
        grad_date DATE NOT NULL,
        program VARCHAR(200) NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS certification (
        c_id {serial},
        uid VARCHAR(36) NOT NULL REFERENCES jobseeker(uid) ON DELETE CASCADE,
        cert_name VARCHAR(200) NOT NULL,
        start_date DATE NOT NULL,
        end_date DATE NOT NULL,
        issuer VARCHAR(200) NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS resumes (
        resume_id {serial},
        uid VARCHAR(36) NOT NULL REFERENCES jobseeker(uid) ON DELETE CASCADE,
        snapshot {json} NOT NULL
    )
    """,
]


def render_tables(dialect: str) -> List[str]:
    """Return the CREATE TABLE statements for a SQLAlchemy dialect name."""
    if dialect not in TYPE_MAP:
        raise ValueError(f"Unsupported database dialect: {dialect}")
    types = TYPE_MAP[dialect]
    return [stmt.format(**types).strip() for stmt in TABLES]


def create_schema(db: Database) -> None:
    """Create every table that does not exist yet."""
    statements = render_tables(db.dialect)
    with db.session() as session:
        for stmt in statements:
            session.execute(text(stmt))
    logger.info(f"Schema ready ({len(statements)} tables)")
