"""
Difficulty feedback loop.

After a successful dismissal the most recent history window is sent to the
difficulty advisor and the suggested level is applied to the alarm that
fired.  Any advisor failure leaves the difficulty unchanged: this sub-step
never fails loudly.
"""

from __future__ import annotations

from typing import Optional, Sequence

from app.core.logging_handler import setup_logger
from app.engine.advisors import DifficultyAdvisor
from app.engine.store import AlarmStore
from app.schemas.alarm import Alarm, Difficulty
from app.schemas.stats import WakeUpEvent

logger = setup_logger(__name__)

HISTORY_WINDOW = 5


def recent_window(history: Sequence[WakeUpEvent], window: int = HISTORY_WINDOW) -> list[WakeUpEvent]:
    """Last *window* events, chronological."""
    if window <= 0:
        return []
    return list(history[-window:])


def recompute_difficulty(
    alarm_id: str,
    history: Sequence[WakeUpEvent],
    advisor: DifficultyAdvisor,
    window: int = HISTORY_WINDOW,
) -> Optional[Difficulty]:
    """Ask *advisor* for a difficulty based on the recent *history*.

    Returns:
        The suggested :class:`Difficulty`, or ``None`` if the advisor
        failed (the caller keeps the current difficulty).
    """
    recent = recent_window(history, window)
    try:
        suggestion = advisor.suggest_difficulty(recent)
        difficulty = Difficulty(suggestion.difficulty)
    except Exception:
        logger.warning("Difficulty advisor failed for alarm %s; difficulty unchanged", alarm_id, exc_info=True)
        return None

    logger.info("Difficulty for alarm %s -> %s (%s)", alarm_id, difficulty.value, suggestion.reason)
    return difficulty


def apply_difficulty(store: AlarmStore, alarm_id: str, difficulty: Difficulty) -> Optional[Alarm]:
    """Write *difficulty* to the alarm.  No-op if the alarm was deleted meanwhile."""
    return store.update(alarm_id, {"difficulty": difficulty})
