"""
Stats aggregator — streak, points, badges and wake-up history.

:func:`apply_outcome` is a pure reducer: it returns a new
:class:`UserStats` and never mutates its input.  It is monotonic:

- ``total_points`` never decreases,
- ``badges`` only grow (set semantics, no duplicates),
- ``wake_up_history`` gains exactly one record per call.

Streak breaking on missed days is not handled here (there is no missed-day
detector); the streak only grows on successful dismissals.
"""

from __future__ import annotations

from typing import Optional

from app.schemas.advisor import Reward
from app.schemas.stats import RecentTime, StatsSummary, UserStats, WakeUpEvent

# ======================================================================
# Levels (points thresholds)
# ======================================================================

_LEVELS: list[tuple[str, float]] = [
    ("Novice", 250),
    ("Early Bird", 1000),
    ("Morning Pro", 2500),
    ("Zen Master", float("inf")),
]

_RECENT_TIMES = 7


def level_for(points: int) -> str:
    """Map total points to a level label."""
    for label, upper in _LEVELS:
        if points < upper:
            return label
    return "Zen Master"


# ======================================================================
# Reducer
# ======================================================================


def apply_outcome(stats: UserStats, event: WakeUpEvent, reward: Reward) -> UserStats:
    """Fold one resolved wake-up into *stats*."""
    badges = list(stats.badges)
    if reward.badge and reward.badge not in badges:
        badges.append(reward.badge)

    return UserStats(
        streak=stats.streak + 1 if event.success else stats.streak,
        total_points=stats.total_points + max(reward.points, 0),
        badges=badges,
        wake_up_history=[*stats.wake_up_history, event],
    )


def summarize(stats: UserStats) -> StatsSummary:
    """Dashboard metrics derived from *stats*."""
    history = stats.wake_up_history
    times = [e.time_taken_seconds for e in history]
    successes = sum(1 for e in history if e.success)

    return StatsSummary(
        streak=stats.streak,
        total_points=stats.total_points,
        level=level_for(stats.total_points),
        badges=list(stats.badges),
        total_wake_ups=len(history),
        best_time_seconds=min(times) if times else None,
        average_time_seconds=round(sum(times) / len(times)) if times else None,
        success_rate=round(successes / len(history) * 100) if history else 0,
        recent_times=[
            RecentTime(date=e.date, seconds=e.time_taken_seconds)
            for e in history[-_RECENT_TIMES:]
        ],
    )


class StatsAggregator:
    """Owner of the process-wide :class:`UserStats`.

    The stats are replaced only through :meth:`record` (reward
    application) or :meth:`load` (hydration).
    """

    def __init__(self, stats: Optional[UserStats] = None):
        self._stats = stats or UserStats()

    @property
    def stats(self) -> UserStats:
        return self._stats

    def load(self, stats: UserStats) -> None:
        self._stats = stats

    def record(self, event: WakeUpEvent, reward: Reward) -> UserStats:
        self._stats = apply_outcome(self._stats, event, reward)
        return self._stats

    def recent_history(self, window: int = 5) -> list[WakeUpEvent]:
        """Last *window* events, oldest first."""
        if window <= 0:
            return []
        return list(self._stats.wake_up_history[-window:])

    def summary(self) -> StatsSummary:
        return summarize(self._stats)
