"""
Alarm store — in-memory ordered collection of alarm records.

Pure data: no timing logic.  Records are validated at the edit boundary by
:mod:`app.schemas.alarm`; patches are checked again against the merged record.  Callers serialise access with
the owning service's lock.
"""

from __future__ import annotations

import secrets
import time
from typing import Optional

from app.schemas.alarm import Alarm, AlarmCreate

COPY_PREFIX = "Copy of "


def new_alarm_id() -> str:
    """Millisecond timestamp plus a random suffix.

    The suffix keeps ids unique when two alarms are created within the same
    millisecond (e.g. duplicating twice in a row).
    """
    return f"{int(time.time() * 1000)}{secrets.token_hex(3)}"


class AlarmStore:
    """Ordered alarm collection keyed by id."""

    def __init__(self, alarms: Optional[list[Alarm]] = None):
        self._alarms: list[Alarm] = list(alarms or [])

    def add(self, alarm: AlarmCreate | Alarm) -> Alarm:
        """Append *alarm* under a freshly generated id."""
        data = alarm.model_dump(exclude={"id"})
        stored = Alarm(id=new_alarm_id(), **data)
        self._alarms.append(stored)
        return stored

    def get(self, alarm_id: str) -> Optional[Alarm]:
        for alarm in self._alarms:
            if alarm.id == alarm_id:
                return alarm
        return None

    def update(self, alarm_id: str, patch: dict) -> Optional[Alarm]:
        """Replace the fields in *patch* on the record with *alarm_id*.

        No-op returning ``None`` if the id is absent.  The id itself is
        never patched.  The merged record is re-validated, so a bad patch
        raises :class:`pydantic.ValidationError` and leaves the store as it was.
        """
        patch = {k: v for k, v in patch.items() if k != "id"}
        for index, alarm in enumerate(self._alarms):
            if alarm.id == alarm_id:
                updated = Alarm.model_validate({**alarm.model_dump(), **patch})
                self._alarms[index] = updated
                return updated
        return None

    def remove(self, alarm_id: str) -> bool:
        for index, alarm in enumerate(self._alarms):
            if alarm.id == alarm_id:
                del self._alarms[index]
                return True
        return False

    def toggle_active(self, alarm_id: str) -> Optional[Alarm]:
        alarm = self.get(alarm_id)
        if alarm is None:
            return None
        return self.update(alarm_id, {"is_active": not alarm.is_active})

    def duplicate(self, alarm_id: str) -> Optional[Alarm]:
        """Copy an alarm under a new id, labelled ``Copy of …`` and inactive."""
        alarm = self.get(alarm_id)
        if alarm is None:
            return None
        copy = alarm.model_copy(update={
            "label": f"{COPY_PREFIX}{alarm.label}",
            "is_active": False,
        })
        return self.add(copy)

    def list(self) -> list[Alarm]:
        """Return all alarms in insertion order (evaluation order)."""
        return list(self._alarms)

    def replace_all(self, alarms: list[Alarm]) -> None:
        """Swap the whole collection, keeping the given ids (hydration)."""
        self._alarms = list(alarms)

    def __len__(self) -> int:
        return len(self._alarms)
