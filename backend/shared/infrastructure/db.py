"""
Database configuration and session management for the remote store.
Uses SQLAlchemy 2.0 patterns.

The engine is only created when a database URL is configured; without one
the application runs entirely on the local store (demo mode).
"""

from collections.abc import Generator
from contextlib import contextmanager
from functools import lru_cache

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from shared.config.settings import settings


def build_engine(database_url: str) -> Engine:
    """Create an engine with connection pooling and timeouts."""
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=False,
        )
    return create_engine(
        database_url,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=5,
        max_overflow=10,
        pool_timeout=30,  # Wait max 30s for connection from pool
        pool_recycle=1800,  # Recycle connections after 30 minutes
        connect_args={"connect_timeout": 10},
        echo=False,  # Set to True for SQL logging in development
    )


@lru_cache
def get_engine() -> Engine | None:
    """Engine for the configured remote store, or None in demo mode."""
    if not settings.remote_configured:
        return None
    return build_engine(settings.database_url)


@lru_cache
def get_session_factory() -> sessionmaker[Session] | None:
    """Session factory bound to the remote engine, or None in demo mode."""
    engine = get_engine()
    if engine is None:
        return None
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@contextmanager
def get_db_context(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    """
    Context manager for database sessions outside of FastAPI.

    Usage:
        with get_db_context(factory) as db:
            db.scalars(select(ProductModel)).all()
    """
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


def safe_commit(db: Session) -> None:
    """
    Commit with automatic rollback on failure.

    Raises the original exception after rolling back.
    """
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
