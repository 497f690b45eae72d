"""Database configuration and session management."""

import logging
import sqlite3
from collections.abc import Generator, Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from todo_api.config import get_settings
from todo_api.exceptions import StorageError

logger = logging.getLogger(__name__)

settings = get_settings()


def engine_kwargs(database_url: str) -> dict[str, Any]:
    """Engine options for the given backend."""
    if database_url.startswith("sqlite"):
        # Sync endpoints run in FastAPI's threadpool
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "pool_size": 5, "max_overflow": 10}


engine = create_engine(settings.database_url, **engine_kwargs(settings.database_url))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base: Any = declarative_base()


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ships with foreign keys off, which would disable ON DELETE CASCADE."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def get_db() -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Initialize the database by creating all tables."""
    # Import all models here so they are registered with Base.metadata
    from todo_api import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def _rollback_quietly(db: Session) -> None:
    try:
        db.rollback()
    except SQLAlchemyError as e:
        logger.error(f"Rollback failed: {e}")


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """Run a unit of work that either commits completely or not at all.

    Any exception raised inside the block rolls the session back. Driver errors
    are re-raised as StorageError; a failing rollback is only logged so that the
    original error is the one the caller sees.
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        _rollback_quietly(db)
        raise StorageError(f"Database error: {e}") from e
    except Exception:
        _rollback_quietly(db)
        raise
