"""
Wake-up statistics schemas.

``UserStats`` is a single process-wide aggregate.  Its history is
append-only and chronological; points never decrease; badges have set
semantics.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class WakeUpEvent(BaseModel):
    """Immutable record of a resolved dismissal."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: datetime.datetime = Field(..., description="Resolution timestamp")
    time_taken_seconds: int = Field(
        ..., ge=0, alias="timeTakenSeconds",
        description="Seconds between trigger start and resolution",
    )
    success: bool


class UserStats(BaseModel):
    """Accumulated streak, points, badges and wake-up history."""

    model_config = ConfigDict(populate_by_name=True)

    streak: int = Field(0, ge=0, description="Consecutive successful dismissals")
    total_points: int = Field(0, ge=0, alias="totalPoints")
    badges: list[str] = Field(default_factory=list)
    wake_up_history: list[WakeUpEvent] = Field(default_factory=list, alias="wakeUpHistory")


class RecentTime(BaseModel):
    """One bar of the reaction-time chart."""

    date: datetime.datetime
    seconds: int


class StatsSummary(BaseModel):
    """Dashboard metrics derived from :class:`UserStats`."""

    streak: int
    total_points: int
    level: str = Field(
        ...,
        description="One of: Novice, Early Bird, Morning Pro, Zen Master",
    )
    badges: list[str]
    total_wake_ups: int
    best_time_seconds: Optional[int] = Field(
        None, description="Fastest dismissal (None without history)",
    )
    average_time_seconds: Optional[int] = None
    success_rate: int = Field(..., ge=0, le=100, description="Percent of successful events")
    recent_times: list[RecentTime] = Field(
        default_factory=list, description="Last 7 events, oldest first",
    )
