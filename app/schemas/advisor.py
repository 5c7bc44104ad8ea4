"""
Advisory collaborator schemas.

The reward and difficulty decisions are delegated to advisors.  These
schemas are the response contracts the trigger lifecycle applies.
"""

from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.alarm import Difficulty


class Reward(BaseModel):
    """Points (and optionally a badge) granted for a dismissal."""

    points: int = Field(..., ge=0, description="Points to add to the total")
    badge: Optional[str] = Field(
        None,
        description="Badge to award, e.g. 'Early Bird' (None if no badge)",
    )
    reason: str = Field(..., description="Short encouraging message")


class DifficultySuggestion(BaseModel):
    """Difficulty suggested from recent wake-up history."""

    difficulty: Difficulty
    reason: str
