"""Database repositories."""

from app.db.repositories.kv_store import InMemoryKeyValueStore, KeyValueStore, SQLKeyValueStore
from app.db.repositories.state import StateRepository

__all__ = [
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "SQLKeyValueStore",
    "StateRepository",
]
