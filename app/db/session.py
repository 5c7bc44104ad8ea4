"""
Database session management.

Provides the SQLModel engine.
"""

from sqlalchemy.engine import Engine
from sqlmodel import create_engine

from app.core.config import settings


def make_engine(url: str = settings.DATABASE_URL) -> Engine:
    """Create an engine for *url*.

    SQLite connections are shared between the scheduler thread and request
    handlers, so the same-thread check is disabled for them.
    """
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(
        url,
        echo=settings.DEBUG,  # Log SQL queries in debug mode
        pool_pre_ping=True,   # Verify connections before using
        connect_args=connect_args,
    )


# Create database engine
engine = make_engine()

