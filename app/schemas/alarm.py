"""
Alarm API schemas.

An alarm is a recurring wake-up definition evaluated against local
wall-clock time.  Validation happens here, at the edit boundary: a record
that reaches the alarm store is always well formed.

JSON uses the camelCase keys of the persisted format (``isActive``,
``snoozeEnabled``, ``snoozeDuration``); snake_case names are accepted on
input as well.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.core.config import settings

# Sunday = 0, as in the persisted format.
DAYS_OF_WEEK = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class Difficulty(str, Enum):
    """Challenge complexity, tuned per alarm by the feedback loop."""
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


def _validate_time(value: str) -> str:
    if not _TIME_RE.match(value):
        raise ValueError(f"time must be HH:MM (24h), got {value!r}")
    return value


def _validate_days(value: list[int]) -> list[int]:
    for day in value:
        if not 0 <= day <= 6:
            raise ValueError(f"weekday index must be in 0..6, got {day}")
    return sorted(set(value))


class AlarmBase(BaseModel):
    """Base alarm schema with common fields."""

    model_config = ConfigDict(populate_by_name=True)

    time: str = Field(
        "07:00",
        description="Ring time, HH:MM 24h local wall-clock",
    )
    days: list[int] = Field(
        default_factory=lambda: [1, 2, 3, 4, 5],
        description="Weekday indices (0 = Sunday); empty means never",
    )
    label: str = Field("", max_length=200)
    is_active: bool = Field(True, alias="isActive")
    difficulty: Difficulty = Difficulty.MEDIUM
    snooze_enabled: bool = Field(True, alias="snoozeEnabled")
    snooze_duration_minutes: int = Field(
        settings.DEFAULT_SNOOZE_MINUTES, gt=0, le=120, alias="snoozeDuration",
        description="Snooze length in minutes",
    )
    sound: str = Field("classic", description="Sound catalog id (opaque)")
    volume: float = Field(1.0, ge=0.0, le=1.0)

    @field_validator("time")
    @classmethod
    def check_time(cls, value: str) -> str:
        return _validate_time(value)

    @field_validator("days")
    @classmethod
    def check_days(cls, value: list[int]) -> list[int]:
        return _validate_days(value)


class AlarmCreate(AlarmBase):
    """Schema for creating an alarm.  The store assigns the id."""


class Alarm(AlarmBase):
    """A stored alarm record."""

    id: str = Field(..., description="Opaque unique id, stable across edits")


class AlarmUpdate(BaseModel):
    """Schema for a partial alarm edit.  Only the fields sent are applied."""

    model_config = ConfigDict(populate_by_name=True)

    time: Optional[str] = None
    days: Optional[list[int]] = None
    label: Optional[str] = Field(None, max_length=200)
    is_active: Optional[bool] = Field(None, alias="isActive")
    difficulty: Optional[Difficulty] = None
    snooze_enabled: Optional[bool] = Field(None, alias="snoozeEnabled")
    snooze_duration_minutes: Optional[int] = Field(None, gt=0, le=120, alias="snoozeDuration")
    sound: Optional[str] = None
    volume: Optional[float] = Field(None, ge=0.0, le=1.0)

    @field_validator("time")
    @classmethod
    def check_time(cls, value: Optional[str]) -> Optional[str]:
        return _validate_time(value) if value is not None else None

    @field_validator("days")
    @classmethod
    def check_days(cls, value: Optional[list[int]]) -> Optional[list[int]]:
        return _validate_days(value) if value is not None else None

    @model_validator(mode="after")
    def reject_nulls(self):
        # Every alarm field is required on the stored record.
        nulls = sorted(name for name in self.model_fields_set if getattr(self, name) is None)
        if nulls:
            raise ValueError(f"fields cannot be null: {', '.join(nulls)}")
        return self

    def to_patch(self) -> dict:
        """Field-name keyed dict of the values actually sent."""
        return self.model_dump(exclude_unset=True)
