"""
Alembic environment for the WakeWise snapshot database.

The schema is a single ``kv_entries`` table.  SQLite is the default
backend, so migrations run in batch mode (SQLite cannot ALTER most
column definitions in place).
"""

from logging.config import fileConfig

from alembic import context
from sqlmodel import SQLModel

from app.core.config import settings
# Register the KVEntry table on SQLModel.metadata
from app.db import base  # noqa: F401
from app.db.session import make_engine

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

database_url = config.get_main_option("sqlalchemy.url") or settings.DATABASE_URL
target_metadata = SQLModel.metadata


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def run_migrations_offline() -> None:
    """Emit the migration SQL for *database_url* without connecting."""
    context.configure(
        url=database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=_is_sqlite(database_url),
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply migrations through an engine built like the application's."""
    connectable = make_engine(database_url)

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=_is_sqlite(database_url),
            compare_type=True,
        )

        with context.begin_transaction():
            context.run_migrations()

    connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
