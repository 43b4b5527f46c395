from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager

from loguru import logger
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from tutorlink.config.settings import settings
from tutorlink.core.errors import TutorlinkError

# Lazy initialization to avoid import-time database connections
_engine = None
_SessionLocal = None


def _get_engine():
    """Get or create the database engine (lazy initialization)."""
    global _engine
    if _engine is None:
        logger.info(f"Initializing database engine: {settings.database_url}")

        connect_args = {}
        if "sqlite" in settings.database_url.lower():
            connect_args = {"check_same_thread": False}
            logger.warning("Using SQLite database (local development only)")
        else:
            connect_args = {"connect_timeout": 10, "application_name": "tutorlink"}

        _engine = create_engine(
            settings.database_url,
            connect_args=connect_args,
            echo=False,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        logger.info("Database engine initialized")
    return _engine


def get_engine():
    """Get or create the database engine (public API)."""
    return _get_engine()


def _get_session_local():
    """Get or create the session factory (lazy initialization)."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_get_engine())
        logger.info("Database session factory initialized")
    return _SessionLocal


def init_db() -> None:
    """Create all tables for the registered models."""
    from tutorlink.db.models import Base

    Base.metadata.create_all(bind=_get_engine())
    logger.info("Database schema ensured")


def get_db() -> Generator[Session, None, None]:
    """Get database session for FastAPI dependencies.

    This is a plain generator function (NOT a context manager) that FastAPI
    can use directly with Depends(). Repositories commit their own writes.

    For non-FastAPI code that needs a context manager, use get_session() instead.
    """
    logger.debug("Creating new database session (FastAPI dependency)")
    session = _get_session_local()()
    try:
        yield session
    finally:
        logger.debug("Closing database session (FastAPI dependency)")
        session.close()


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """Get database session context manager.

    Handles domain errors vs database errors separately:
    - TutorlinkError: rolled back and re-raised without error logging
      (expected business condition, not a DB failure)
    - Other exceptions: logged as database errors, rolled back, re-raised
    """
    session = _get_session_local()()
    try:
        yield session
        if session.dirty or session.new or session.deleted:
            session.commit()
            logger.debug("Database session committed successfully")
    except TutorlinkError as e:
        logger.debug(f"{type(e).__name__} in session, rolling back: {e.message}")
        session.rollback()
        raise
    except Exception as e:
        logger.error(
            f"Database session error during commit, rolling back: {e}. "
            f"Error type: {type(e).__name__}, session state: "
            f"dirty={len(session.dirty)}, new={len(session.new)}, deleted={len(session.deleted)}"
        )
        session.rollback()
        raise
    finally:
        session.close()
