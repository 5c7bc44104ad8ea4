"""
Engine state repository.

Serializes the alarm list and the user stats to JSON under the ``alarms``
and ``stats`` keys.  Persistence failures are logged and never raised: the
in-memory state stays authoritative and the next successful save
reconciles.  Unreadable snapshots are logged and replaced by defaults; an
unreadable alarm record is skipped on its own.
"""

from typing import Any

from pydantic import TypeAdapter, ValidationError

from app.core.logging_handler import setup_logger
from app.db.repositories.kv_store import KeyValueStore
from app.schemas.alarm import Alarm
from app.schemas.stats import UserStats

logger = setup_logger(__name__)

ALARMS_KEY = "alarms"
STATS_KEY = "stats"

_ALARM_LIST = TypeAdapter(list[Alarm])
_RAW_LIST = TypeAdapter(list[Any])


class StateRepository:
    """Load/save whole-state snapshots through a :class:`KeyValueStore`."""

    def __init__(self, kv: KeyValueStore):
        self.kv = kv

    # ------------------------------------------------------------------
    # Alarms
    # ------------------------------------------------------------------

    def load_alarms(self) -> list[Alarm]:
        raw = self._load(ALARMS_KEY)
        if raw is None:
            return []
        try:
            items = _RAW_LIST.validate_json(raw)
        except ValidationError:
            logger.error("Stored alarms are unreadable; starting with none", exc_info=True)
            return []

        # One bad record must not cost the others.
        alarms = []
        for index, item in enumerate(items):
            try:
                alarms.append(Alarm.model_validate(item))
            except ValidationError as e:
                logger.error("Skipping unreadable stored alarm #%d: %s", index, e)
        return alarms

    def save_alarms(self, alarms: list[Alarm]) -> bool:
        return self._save(ALARMS_KEY, _ALARM_LIST.dump_json(alarms, by_alias=True))

    # ------------------------------------------------------------------
    # Stats
    # ------------------------------------------------------------------

    def load_stats(self) -> UserStats:
        raw = self._load(STATS_KEY)
        if raw is None:
            return UserStats()
        try:
            return UserStats.model_validate_json(raw)
        except ValidationError:
            logger.error("Stored stats are unreadable; starting fresh", exc_info=True)
            return UserStats()

    def save_stats(self, stats: UserStats) -> bool:
        return self._save(STATS_KEY, stats.model_dump_json(by_alias=True).encode())

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _load(self, key: str):
        try:
            return self.kv.load(key)
        except Exception:
            logger.error("Loading %r failed", key, exc_info=True)
            return None

    def _save(self, key: str, value: bytes) -> bool:
        try:
            self.kv.save(key, value)
            return True
        except Exception:
            logger.error("Saving %r failed; in-memory state kept", key, exc_info=True)
            return False
