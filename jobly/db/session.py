"""
Database handle.

One Database object owns the engine (and its connection pool) for the
lifetime of the app; create_app() builds it and stores it on app.state.
Services receive it explicitly.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_engine(url: str, echo: bool = False) -> Engine:
    """
    Create the engine.

    PostgreSQL gets a connection pool:
    pool_size=5: maintain 5 connections ready
    max_overflow=10: allow 10 extra connections under load

    In-memory SQLite shares one connection so every session sees the same data.
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, echo=echo, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(url, pool_size=5, max_overflow=10, echo=echo)


class Database:
    def __init__(self, url: str, echo: bool = False):
        self.engine = make_engine(url, echo=echo)
        # Session factory
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """
        Transaction scope: commit on success, rollback on any error.
        Usage:
            with db.session() as s:
                s.execute(text("SELECT * FROM users"))
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def ping(self) -> bool:
        """Return True if the store answers a trivial query."""
        try:
            with self.session() as s:
                return s.execute(text("SELECT 1")).scalar() == 1
        except Exception:
            logger.exception("Database connection failed")
            return False

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Database:
    """
    Dependency for FastAPI route injection.
    Usage:
        @router.get("/users")
        def list_users(db: Database = Depends(get_db)):
            ...
    """
    return request.app.state.db
