"""Unit tests for alarm, stats and challenge schemas (validation at the edit boundary)."""

import datetime

import pytest
from pydantic import ValidationError

from app.schemas.alarm import Alarm, AlarmCreate, AlarmUpdate, Difficulty
from app.schemas.stats import UserStats, WakeUpEvent
from app.schemas.trigger import Challenge, ChallengeType


class TestAlarmCreate:
    def test_defaults(self):
        alarm = AlarmCreate()
        assert alarm.time == "07:00"
        assert alarm.days == [1, 2, 3, 4, 5]
        assert alarm.is_active is True
        assert alarm.difficulty == Difficulty.MEDIUM
        assert alarm.snooze_enabled is True
        assert alarm.snooze_duration_minutes == 5

    @pytest.mark.parametrize("time", ["7:00", "24:00", "07:60", "0700", "", "07:00:00"])
    def test_rejects_bad_time(self, time):
        with pytest.raises(ValidationError):
            AlarmCreate(time=time)

    @pytest.mark.parametrize("time", ["00:00", "07:05", "23:59"])
    def test_accepts_valid_time(self, time):
        assert AlarmCreate(time=time).time == time

    def test_days_out_of_range(self):
        with pytest.raises(ValidationError):
            AlarmCreate(days=[1, 7])

    def test_days_sorted_and_deduplicated(self):
        assert AlarmCreate(days=[5, 1, 5, 0]).days == [0, 1, 5]

    def test_empty_days_allowed(self):
        assert AlarmCreate(days=[]).days == []

    @pytest.mark.parametrize("minutes", [0, -5, 121])
    def test_snooze_duration_bounds(self, minutes):
        with pytest.raises(ValidationError):
            AlarmCreate(snooze_duration_minutes=minutes)

    def test_volume_bounds(self):
        with pytest.raises(ValidationError):
            AlarmCreate(volume=1.5)

    def test_unknown_difficulty(self):
        with pytest.raises(ValidationError):
            AlarmCreate(difficulty="EXTREME")

    def test_camel_case_aliases(self):
        alarm = AlarmCreate.model_validate({"isActive": False, "snoozeEnabled": False, "snoozeDuration": 9})
        assert alarm.is_active is False
        assert alarm.snooze_enabled is False
        assert alarm.snooze_duration_minutes == 9

    def test_dump_by_alias(self):
        data = Alarm(id="a", label="Gym").model_dump(by_alias=True)
        assert data["isActive"] is True
        assert data["snoozeDuration"] == 5
        assert "is_active" not in data


class TestAlarmUpdate:
    def test_patch_contains_only_sent_fields(self):
        update = AlarmUpdate.model_validate({"label": "Gym", "isActive": False})
        assert update.to_patch() == {"label": "Gym", "is_active": False}

    @pytest.mark.parametrize(
        "field",
        ["time", "days", "label", "isActive", "difficulty", "snoozeEnabled", "snoozeDuration", "sound", "volume"],
    )
    def test_rejects_explicit_null(self, field):
        with pytest.raises(ValidationError):
            AlarmUpdate.model_validate({field: None})

    def test_empty_patch(self):
        assert AlarmUpdate().to_patch() == {}

    def test_validates_time(self):
        with pytest.raises(ValidationError):
            AlarmUpdate(time="25:00")

    def test_normalizes_days(self):
        assert AlarmUpdate(days=[3, 3, 2]).to_patch() == {"days": [2, 3]}


class TestStatsSchemas:
    def test_event_is_frozen(self):
        event = WakeUpEvent(date=datetime.datetime(2026, 10, 19, 7, 0), time_taken_seconds=8, success=True)
        with pytest.raises(ValidationError):
            event.success = False

    def test_event_rejects_negative_time(self):
        with pytest.raises(ValidationError):
            WakeUpEvent(date=datetime.datetime(2026, 10, 19), time_taken_seconds=-1, success=True)

    def test_stats_persisted_format(self):
        stats = UserStats.model_validate({
            "streak": 2,
            "totalPoints": 40,
            "badges": ["3-Day Streak"],
            "wakeUpHistory": [{"date": "2026-10-19T07:00:08", "timeTakenSeconds": 8, "success": True}],
        })
        assert stats.total_points == 40
        assert stats.wake_up_history[0].time_taken_seconds == 8


class TestChallenge:
    def test_requires_four_options(self):
        with pytest.raises(ValidationError):
            Challenge(question="1 + 1?", options=["2", "3", "4"], answer="2", type=ChallengeType.MATH)

    def test_answer_must_be_an_option(self):
        with pytest.raises(ValidationError):
            Challenge(question="1 + 1?", options=["3", "4", "5", "6"], answer="2", type=ChallengeType.MATH)
