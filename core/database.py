import sqlite3
from typing import Generator

from sqlalchemy import create_engine, event, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from core.config import settings


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, _record) -> None:
    # cascading deletes of words and users rely on this under SQLite
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _engine_kwargs(url: str) -> dict:
    if url in ("sqlite://", "sqlite:///:memory:"):
        # one shared in-memory database for every session
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


engine = create_engine(settings.DATABASE_URL, echo=False, future=True, **_engine_kwargs(settings.DATABASE_URL))
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
Base = declarative_base()

TABLES = ("users", "vocabulary", "user_vocabulary", "submissions", "refresh_tokens")


# dependency
def get_db() -> Generator:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    """Create every table that is not there yet.

    Alembic owns the schema in deployments; this is used by the
    ``/api/init-database`` bootstrap and by the test suite.
    """
    from models import refresh_token, submission, user, user_vocabulary, vocabulary  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def is_database_initialized(bind: Engine | None = None) -> bool:
    existing = set(inspect(bind or engine).get_table_names())
    return all(table in existing for table in TABLES)
