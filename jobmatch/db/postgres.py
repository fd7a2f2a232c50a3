from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from fastapi import Request
from loguru import logger
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from jobmatch.core.config import Settings


class Database:
    """
    Pooled access to the relational store.

    Created once at application startup (connect) and disposed at shutdown.
    Route handlers receive it through the get_database dependency.
    """

    def __init__(self, url: str, pool_size: int = 5, max_overflow: int = 10, echo: bool = False):
        self.url = url
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.echo = echo
        self.engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.sqlalchemy_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            echo=settings.db_echo,
        )

    @property
    def dialect(self) -> str:
        return self.engine.dialect.name if self.engine is not None else ""

    def connect(self) -> None:
        if self.engine is not None:
            return
        kwargs: Dict[str, Any] = {"echo": self.echo, "pool_pre_ping": True}
        if self.url.startswith("sqlite"):
            # sqlite pools are per-thread; the profile reads run in the threadpool
            kwargs["connect_args"] = {"check_same_thread": False}
        else:
            # pool_size: connections kept ready, max_overflow: extra under load
            kwargs["pool_size"] = self.pool_size
            kwargs["max_overflow"] = self.max_overflow
        self.engine = create_engine(self.url, **kwargs)
        if self.dialect == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        logger.info(f"Database engine created ({self.dialect})")

    def dispose(self) -> None:
        if self.engine is None:
            return
        self.engine.dispose()
        self.engine = None
        self._session_factory = None
        logger.info("Database connections closed")

    @contextmanager
    def session(self):
        """
        Context manager for database sessions.
        Usage:
            with db.session() as session:
                session.execute(text("SELECT * FROM jobseeker"))
        """
        if self._session_factory is None:
            raise RuntimeError("Database is not connected")
        session: Session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def fetch_all(self, sql: str, params: Optional[dict] = None) -> List[dict]:
        """Execute a query and return its rows as a list of dicts."""
        with self.session() as session:
            result = session.execute(text(sql), params or {})
            return [dict(row) for row in result.mappings().all()]

    def fetch_one(self, sql: str, params: Optional[dict] = None) -> Optional[dict]:
        rows = self.fetch_all(sql, params)
        return rows[0] if rows else None

    def execute(self, sql: str, params: Optional[dict] = None) -> int:
        """Execute a statement without RETURNING; returns the affected row count."""
        with self.session() as session:
            result = session.execute(text(sql), params or {})
            return result.rowcount

    def ping(self) -> bool:
        """
        Test if the store is reachable.
        Returns True if connection successful, False otherwise.
        """
        try:
            row = self.fetch_one("SELECT 1 AS test")
            return row is not None and row["test"] == 1
        except Exception as e:
            logger.warning(f"Database connection failed: {e}")
            return False


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_database(request: Request) -> Database:
    """
    Dependency for FastAPI route injection.
    Usage:
        @router.get("/jobseeker/{uid}")
        def get_jobseeker(uid: str, db: Database = Depends(get_database)):
            ...
    """
    return request.app.state.db
