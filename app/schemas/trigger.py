"""
Trigger lifecycle schemas.

A trigger is the live, ringing instance of an alarm.  At most one exists
at any instant; the trigger controller owns it.
"""

import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from app.schemas.advisor import Reward
from app.schemas.alarm import Alarm, Difficulty
from app.schemas.stats import WakeUpEvent


class TriggerState(str, Enum):
    """Trigger controller states."""
    IDLE = "IDLE"
    RINGING = "RINGING"
    RESOLVING = "RESOLVING"


class ChallengeType(str, Enum):
    MATH = "MATH"
    TRIVIA = "TRIVIA"


class Challenge(BaseModel):
    """Multiple-choice question gating dismissal."""

    question: str
    options: list[str] = Field(..., min_length=4, max_length=4)
    answer: str
    type: ChallengeType

    @model_validator(mode="after")
    def answer_is_an_option(self):
        if self.answer not in self.options:
            raise ValueError("answer must be one of the options")
        return self


class ActiveTrigger(BaseModel):
    """The currently ringing alarm."""

    alarm: Alarm = Field(..., description="Snapshot of the alarm that fired")
    started_at: datetime.datetime
    challenge: Optional[Challenge] = None
    challenge_error: Optional[str] = Field(
        None,
        description="Set when the challenge provider failed and the fallback is in use",
    )
    failed_attempts: int = Field(0, ge=0)


class ResolutionOutcome(str, Enum):
    DISMISSED = "dismissed"
    RETRY = "retry"
    SNOOZED = "snoozed"


class ResolutionResult(BaseModel):
    """What a dismiss/answer/snooze input did."""

    outcome: ResolutionOutcome
    alarm_id: str
    event: Optional[WakeUpEvent] = None
    reward: Optional[Reward] = None
    difficulty: Optional[Difficulty] = Field(
        None, description="Difficulty applied to the alarm (None if unchanged)",
    )
    snoozed_until: Optional[datetime.datetime] = Field(
        None, description="When a snoozed alarm rings again (only if re-arm is enabled)",
    )
    notices: list[str] = Field(
        default_factory=list,
        description="Non-fatal collaborator failures surfaced to the caller",
    )


class TriggerResponse(BaseModel):
    """Trigger controller state for the UI layer."""

    state: TriggerState
    trigger: Optional[ActiveTrigger] = None


class DismissRequest(BaseModel):
    success: bool


class AnswerRequest(BaseModel):
    option: str
