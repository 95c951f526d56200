from contextlib import contextmanager
from typing import Iterator
import logging

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from pathlib import Path
from app.core.config import settings

logger = logging.getLogger(__name__)

connect_args = {}
if settings.database_url.startswith("sqlite"):
    connect_args = {"check_same_thread": False}
    # Ensure data directory exists for file-backed SQLite
    db_path = settings.database_url.replace("sqlite:///", "")
    if db_path and db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    pool_pre_ping=True
)


def enable_sqlite_foreign_keys(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# SQLite leaves foreign key constraints off unless asked per connection
if settings.database_url.startswith("sqlite"):
    event.listen(engine, "connect", enable_sqlite_foreign_keys)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def get_db():
    """Database session dependency"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(session_factory: sessionmaker = SessionLocal) -> Iterator[Session]:
    """
    Run a unit of work in one transaction.

    Commits when the block exits cleanly and rolls back otherwise, so the
    service operations (which only flush) apply all-or-nothing.
    """
    db = session_factory()
    try:
        yield db
        db.commit()
    except Exception:
        logger.warning("Rolling back transaction")
        db.rollback()
        raise
    finally:
        db.close()
