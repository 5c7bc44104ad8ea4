"""WakeWise engine — alarm matching, trigger lifecycle, stats, difficulty feedback."""

from app.engine.matcher import matches
from app.engine.scheduler import SchedulerLoop
from app.engine.stats import StatsAggregator, apply_outcome
from app.engine.store import AlarmStore
from app.engine.trigger import TriggerController

__all__ = [
    "AlarmStore",
    "SchedulerLoop",
    "StatsAggregator",
    "TriggerController",
    "apply_outcome",
    "matches",
]
