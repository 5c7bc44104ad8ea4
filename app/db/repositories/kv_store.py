"""
Key-value store repositories.

The engine's persistence contract is a plain ``load(key) -> bytes | None`` /
``save(key, bytes)`` pair.  :class:`SQLKeyValueStore` backs it with the
``kv_entries`` table; :class:`InMemoryKeyValueStore` keeps it in a dict.
"""

import datetime
from typing import Optional, Protocol

from sqlalchemy.engine import Engine
from sqlmodel import Session

from app.models.kv_entry import KVEntry


class KeyValueStore(Protocol):
    def load(self, key: str) -> Optional[bytes]:
        ...

    def save(self, key: str, value: bytes) -> None:
        ...


class SQLKeyValueStore:
    """Repository for KVEntry database operations."""

    def __init__(self, engine: Engine):
        """
        Initialize repository with a database engine.

        A short-lived session is opened per call so the store can be used
        from the scheduler thread and from request handlers alike.

        Args:
            engine: SQLAlchemy engine
        """
        self.engine = engine

    def load(self, key: str) -> Optional[bytes]:
        """
        Get the value stored under a key.

        Args:
            key: Entry key

        Returns:
            Stored bytes if found, None otherwise
        """
        with Session(self.engine) as session:
            entry = session.get(KVEntry, key)
            return bytes(entry.value) if entry else None

    def save(self, key: str, value: bytes) -> None:
        """
        Create or overwrite the value stored under a key.

        Args:
            key: Entry key
            value: Serialized snapshot
        """
        with Session(self.engine) as session:
            entry = session.get(KVEntry, key)
            if entry is None:
                entry = KVEntry(key=key, value=value)
            else:
                entry.value = value
                entry.updated_at = datetime.datetime.utcnow()
            session.add(entry)
            session.commit()


class InMemoryKeyValueStore:
    """Dict-backed store, used when no database is configured and in tests."""

    def __init__(self):
        self.data: dict[str, bytes] = {}

    def load(self, key: str) -> Optional[bytes]:
        return self.data.get(key)

    def save(self, key: str, value: bytes) -> None:
        self.data[key] = bytes(value)
