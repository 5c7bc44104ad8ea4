"""
Key-value entry database model.

The engine persists whole-state snapshots under a few opaque keys
(``alarms``, ``stats``); each row holds one serialized snapshot.
"""

import datetime

from sqlalchemy import Column, LargeBinary
from sqlmodel import Field, SQLModel


class KVEntry(SQLModel, table=True):
    """One persisted snapshot."""
    __tablename__ = "kv_entries"

    key: str = Field(primary_key=True, max_length=64)
    value: bytes = Field(sa_column=Column(LargeBinary, nullable=False))

    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
