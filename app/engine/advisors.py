"""
Advisory collaborators — challenges, rewards and difficulty suggestions.

The trigger lifecycle only depends on the three contracts below
(:class:`ChallengeProvider`, :class:`RewardAdvisor`,
:class:`DifficultyAdvisor`).  Any of them may be backed by a remote model
and may fail or be slow; the trigger controller degrades to the fallbacks
defined here and never aborts the lifecycle.

The default implementations are deterministic heuristics so the engine
works offline:

* **Rewards** — generous for fast dismissals and streaks, milestone
  badges awarded once.
* **Difficulty** — slow wake-ups push the alarm harder, significant
  struggle eases it, consistently fast wake-ups keep it challenging.
* **Challenges** — arithmetic scaled by difficulty, four options.
"""

from __future__ import annotations

import random
from typing import Optional, Protocol, Sequence

from pydantic import BaseModel, Field

from app.schemas.advisor import DifficultySuggestion, Reward
from app.schemas.alarm import Difficulty
from app.schemas.stats import UserStats, WakeUpEvent
from app.schemas.trigger import Challenge, ChallengeType


# ======================================================================
# Contracts
# ======================================================================


class ChallengeProvider(Protocol):
    def generate_challenge(self, difficulty: Difficulty) -> Challenge:
        ...


class RewardAdvisor(Protocol):
    def evaluate_reward(self, stats: UserStats, time_taken_seconds: int) -> Reward:
        ...


class DifficultyAdvisor(Protocol):
    def suggest_difficulty(self, recent_history: Sequence[WakeUpEvent]) -> DifficultySuggestion:
        ...


# ======================================================================
# Fallbacks
# ======================================================================

FALLBACK_CHALLENGE = Challenge(
    question="What is 12 + 15?",
    options=["25", "27", "30", "22"],
    answer="27",
    type=ChallengeType.MATH,
)


def fallback_reward(points: int) -> Reward:
    """Reward used when the reward advisor fails."""
    return Reward(points=points, badge=None, reason="Good morning!")


# ======================================================================
# Reward heuristic
# ======================================================================


class RewardConfig(BaseModel):
    """Point and badge rules for :class:`HeuristicRewardAdvisor`."""

    base_points: int = Field(10, ge=0)
    fast_seconds: int = Field(15, ge=1)
    fast_bonus: int = Field(15, ge=0)
    quick_seconds: int = Field(30, ge=1)
    quick_bonus: int = Field(5, ge=0)
    streak_bonus_per_day: int = Field(2, ge=0)
    streak_bonus_cap: int = Field(20, ge=0)
    lightning_seconds: int = Field(5, ge=1)


BADGE_LIGHTNING = "Lightning Reflexes"
BADGE_WEEK_STREAK = "7-Day Streak"
BADGE_THREE_DAY_STREAK = "3-Day Streak"


class HeuristicRewardAdvisor:
    """Rule-based :class:`RewardAdvisor`."""

    def __init__(self, config: Optional[RewardConfig] = None):
        self.config = config or RewardConfig()

    def evaluate_reward(self, stats: UserStats, time_taken_seconds: int) -> Reward:
        cfg = self.config
        # Streak including the dismissal being rewarded.
        streak = stats.streak + 1

        points = cfg.base_points
        if time_taken_seconds < cfg.fast_seconds:
            points += cfg.fast_bonus
            speed_note = "Lightning fast wake-up!"
        elif time_taken_seconds < cfg.quick_seconds:
            points += cfg.quick_bonus
            speed_note = "Nice and quick."
        else:
            speed_note = "You made it up."
        points += min(streak * cfg.streak_bonus_per_day, cfg.streak_bonus_cap)

        badge = self._milestone_badge(stats.badges, streak, time_taken_seconds)
        reason = f"{speed_note} {streak}-day streak, +{points} points."
        if badge:
            reason += f" New badge: {badge}."
        return Reward(points=points, badge=badge, reason=reason)

    def _milestone_badge(self, owned: list[str], streak: int, seconds: int) -> Optional[str]:
        """First milestone reached and not yet owned (one badge per dismissal)."""
        candidates = [
            (seconds < self.config.lightning_seconds, BADGE_LIGHTNING),
            (streak >= 7, BADGE_WEEK_STREAK),
            (streak >= 3, BADGE_THREE_DAY_STREAK),
        ]
        for reached, badge in candidates:
            if reached and badge not in owned:
                return badge
        return None


# ======================================================================
# Difficulty heuristic
# ======================================================================


class DifficultyConfig(BaseModel):
    """Thresholds (seconds) for :class:`HeuristicDifficultyAdvisor`."""

    struggling_seconds: float = Field(90.0, gt=0)
    slow_seconds: float = Field(30.0, gt=0)
    fast_seconds: float = Field(10.0, gt=0)
    min_fast_events: int = Field(3, ge=1)


class HeuristicDifficultyAdvisor:
    """Rule-based :class:`DifficultyAdvisor` over reaction times."""

    def __init__(self, config: Optional[DifficultyConfig] = None):
        self.config = config or DifficultyConfig()

    def suggest_difficulty(self, recent_history: Sequence[WakeUpEvent]) -> DifficultySuggestion:
        cfg = self.config
        if not recent_history:
            return DifficultySuggestion(difficulty=Difficulty.MEDIUM, reason="Standard setting")

        times = [e.time_taken_seconds for e in recent_history]
        average = sum(times) / len(times)

        if average > cfg.struggling_seconds:
            return DifficultySuggestion(
                difficulty=Difficulty.EASY,
                reason=f"Average {average:.0f}s, easing up to prevent frustration.",
            )
        if average > cfg.slow_seconds:
            return DifficultySuggestion(
                difficulty=Difficulty.HARD,
                reason=f"Average {average:.0f}s is too slow, harder challenge to force the wake-up.",
            )
        if len(times) >= cfg.min_fast_events and all(t < cfg.fast_seconds for t in times):
            return DifficultySuggestion(
                difficulty=Difficulty.HARD,
                reason="Consistently fast, raising the challenge.",
            )
        return DifficultySuggestion(difficulty=Difficulty.MEDIUM, reason="Steady wake-ups.")


# ======================================================================
# Arithmetic challenges
# ======================================================================

# difficulty -> (operators, operand range)
_ARITHMETIC_LEVELS: dict[Difficulty, tuple[str, tuple[int, int]]] = {
    Difficulty.EASY: ("+", (2, 20)),
    Difficulty.MEDIUM: ("+-", (20, 99)),
    Difficulty.HARD: ("*", (6, 19)),
}


class ArithmeticChallengeProvider:
    """:class:`ChallengeProvider` producing multiple-choice arithmetic."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def generate_challenge(self, difficulty: Difficulty) -> Challenge:
        operators, (low, high) = _ARITHMETIC_LEVELS[Difficulty(difficulty)]
        op = self.rng.choice(operators)
        a = self.rng.randint(low, high)
        b = self.rng.randint(low, high)
        if op == "-" and b > a:
            a, b = b, a

        if op == "+":
            result = a + b
        elif op == "-":
            result = a - b
        else:
            result = a * b

        symbol = "×" if op == "*" else op
        options = self._options(result)
        return Challenge(
            question=f"What is {a} {symbol} {b}?",
            options=[str(o) for o in options],
            answer=str(result),
            type=ChallengeType.MATH,
        )

    def _options(self, result: int) -> list[int]:
        """The answer plus three distinct nearby distractors, shuffled."""
        offsets = [d for d in range(-10, 11) if d != 0]
        distractors = self.rng.sample(offsets, 3)
        options = [result] + [result + d for d in distractors]
        self.rng.shuffle(options)
        return options
