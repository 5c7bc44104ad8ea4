"""
Database initialization.

Creates all tables.
"""

from typing import Optional

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel

from app.core.logging_handler import setup_logger
from app.db.session import engine as default_engine

logger = setup_logger(__name__)


def init_db(engine: Optional[Engine] = None) -> None:
    """
    Initialize database schema.

    - Creates all SQLModel tables (idempotent)
    """

    # Import all models so SQLModel.metadata has them
    from app.db import base  # noqa: F401

    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine or default_engine)
    logger.info("Tables created successfully")


if __name__ == "__main__":
    init_db()
