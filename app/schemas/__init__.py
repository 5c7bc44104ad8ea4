"""Pydantic schemas for request/response validation."""

from app.schemas.alarm import Alarm, AlarmCreate, AlarmUpdate, Difficulty
from app.schemas.advisor import DifficultySuggestion, Reward
from app.schemas.stats import StatsSummary, UserStats, WakeUpEvent
from app.schemas.trigger import (
    ActiveTrigger,
    Challenge,
    ChallengeType,
    ResolutionOutcome,
    ResolutionResult,
    TriggerResponse,
    TriggerState,
)

__all__ = [
    "Alarm",
    "AlarmCreate",
    "AlarmUpdate",
    "Difficulty",
    "DifficultySuggestion",
    "Reward",
    "StatsSummary",
    "UserStats",
    "WakeUpEvent",
    "ActiveTrigger",
    "Challenge",
    "ChallengeType",
    "ResolutionOutcome",
    "ResolutionResult",
    "TriggerResponse",
    "TriggerState",
]
