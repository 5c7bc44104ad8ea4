"""
Unit tests for the stats aggregator.

The reducer must be monotonic: points never decrease, badges only grow,
history gains exactly one record per outcome.
"""

import datetime

import pytest

from app.engine.stats import StatsAggregator, apply_outcome, level_for, summarize
from app.schemas.advisor import Reward
from app.schemas.stats import UserStats, WakeUpEvent

T0 = datetime.datetime(2026, 10, 19, 7, 0, 38)


def _event(seconds: int = 8, success: bool = True, day: int = 0) -> WakeUpEvent:
    return WakeUpEvent(date=T0 + datetime.timedelta(days=day), time_taken_seconds=seconds, success=success)


def _reward(points: int = 10, badge: str | None = None) -> Reward:
    return Reward(points=points, badge=badge, reason="Test")


# ======================================================================
# apply_outcome
# ======================================================================


class TestApplyOutcome:
    def test_success_increments_streak_and_points(self):
        stats = apply_outcome(UserStats(), _event(), _reward(25))
        assert stats.streak == 1
        assert stats.total_points == 25
        assert stats.wake_up_history == [_event()]

    def test_failure_event_keeps_streak(self):
        stats = apply_outcome(UserStats(streak=3), _event(success=False), _reward(0))
        assert stats.streak == 3
        assert len(stats.wake_up_history) == 1

    def test_badge_added_once(self):
        stats = apply_outcome(UserStats(), _event(), _reward(badge="3-Day Streak"))
        stats = apply_outcome(stats, _event(day=1), _reward(badge="3-Day Streak"))
        assert stats.badges == ["3-Day Streak"]

    def test_empty_badge_ignored(self):
        stats = apply_outcome(UserStats(), _event(), _reward(badge=""))
        assert stats.badges == []

    def test_input_not_mutated(self):
        before = UserStats(streak=1, total_points=5, badges=["A"], wake_up_history=[_event()])
        apply_outcome(before, _event(day=1), _reward(badge="B"))
        assert before.streak == 1
        assert before.total_points == 5
        assert before.badges == ["A"]
        assert len(before.wake_up_history) == 1

    @pytest.mark.parametrize("points,badge", [(0, None), (10, "A"), (50, "B"), (0, "A")])
    def test_monotonic(self, points, badge):
        before = UserStats(streak=2, total_points=40, badges=["A"], wake_up_history=[_event(), _event(day=1)])
        after = apply_outcome(before, _event(day=2), _reward(points, badge))
        assert after.total_points >= before.total_points
        assert set(after.badges) >= set(before.badges)
        assert after.wake_up_history[:-1] == before.wake_up_history
        assert len(after.wake_up_history) == len(before.wake_up_history) + 1
        assert after.wake_up_history[-1] == _event(day=2)


# ======================================================================
# Levels and summary
# ======================================================================


class TestLevelFor:
    @pytest.mark.parametrize("points,expected", [
        (0, "Novice"),
        (249, "Novice"),
        (250, "Early Bird"),
        (999, "Early Bird"),
        (1000, "Morning Pro"),
        (2499, "Morning Pro"),
        (2500, "Zen Master"),
        (100000, "Zen Master"),
    ])
    def test_thresholds(self, points, expected):
        assert level_for(points) == expected


class TestSummarize:
    def test_empty_history(self):
        summary = summarize(UserStats())
        assert summary.total_wake_ups == 0
        assert summary.best_time_seconds is None
        assert summary.average_time_seconds is None
        assert summary.success_rate == 0
        assert summary.level == "Novice"
        assert summary.recent_times == []

    def test_metrics(self):
        history = [_event(8), _event(20, day=1), _event(5, day=2), _event(40, success=False, day=3)]
        summary = summarize(UserStats(streak=3, total_points=300, wake_up_history=history))
        assert summary.total_wake_ups == 4
        assert summary.best_time_seconds == 5
        assert summary.average_time_seconds == 18  # 73 / 4 = 18.25
        assert summary.success_rate == 75
        assert summary.level == "Early Bird"

    def test_recent_times_last_seven_oldest_first(self):
        history = [_event(seconds=i, day=i) for i in range(10)]
        summary = summarize(UserStats(wake_up_history=history))
        assert [r.seconds for r in summary.recent_times] == [3, 4, 5, 6, 7, 8, 9]


class TestStatsAggregator:
    def test_record_replaces_stats(self):
        aggregator = StatsAggregator()
        aggregator.record(_event(), _reward(10))
        assert aggregator.stats.total_points == 10
        assert aggregator.stats.streak == 1

    def test_recent_history_window(self):
        aggregator = StatsAggregator(UserStats(wake_up_history=[_event(seconds=i, day=i) for i in range(8)]))
        assert [e.time_taken_seconds for e in aggregator.recent_history(5)] == [3, 4, 5, 6, 7]
        assert aggregator.recent_history(0) == []

    def test_load(self):
        aggregator = StatsAggregator()
        aggregator.load(UserStats(streak=4))
        assert aggregator.summary().streak == 4
