"""Unit tests for the clock matcher."""

import datetime

import pytest

from app.engine.matcher import matches, weekday_index
from fakes import MONDAY_0700_30, make_alarm

SUNDAY = datetime.datetime(2026, 10, 18, 7, 0, 0)


class TestWeekdayIndex:
    def test_sunday_is_zero(self):
        assert weekday_index(SUNDAY) == 0

    def test_monday_is_one(self):
        assert weekday_index(MONDAY_0700_30) == 1

    def test_saturday_is_six(self):
        assert weekday_index(datetime.datetime(2026, 10, 24, 12, 0)) == 6


class TestMatches:
    @pytest.mark.parametrize("second", [0, 1, 30, 59])
    def test_any_second_within_the_minute(self, second):
        alarm = make_alarm(time="07:00", days=[1])
        now = MONDAY_0700_30.replace(second=second, microsecond=123456)
        assert matches(alarm, now) is True

    def test_previous_and_next_minute_do_not_match(self):
        alarm = make_alarm(time="07:00", days=[1])
        assert matches(alarm, datetime.datetime(2026, 10, 19, 6, 59, 59)) is False
        assert matches(alarm, datetime.datetime(2026, 10, 19, 7, 1, 0)) is False

    def test_wrong_weekday(self):
        alarm = make_alarm(time="07:00", days=[2, 3])
        assert matches(alarm, MONDAY_0700_30) is False

    def test_sunday_alarm(self):
        alarm = make_alarm(time="07:00", days=[0])
        assert matches(alarm, SUNDAY) is True

    def test_empty_days_never_fire(self):
        alarm = make_alarm(time="07:00", days=[])
        assert matches(alarm, MONDAY_0700_30) is False

    def test_inactive_never_matches(self):
        alarm = make_alarm(time="07:00", days=[0, 1, 2, 3, 4, 5, 6], is_active=False)
        start = datetime.datetime(2026, 10, 18, 0, 0)
        for minute in range(0, 7 * 24 * 60, 7):
            now = start + datetime.timedelta(minutes=minute)
            assert matches(alarm, now) is False

    def test_matches_exactly_once_per_day_at_minute_granularity(self):
        alarm = make_alarm(time="23:59", days=[0, 1, 2, 3, 4, 5, 6])
        start = datetime.datetime(2026, 10, 19, 0, 0)
        hits = [
            start + datetime.timedelta(minutes=m)
            for m in range(24 * 60)
            if matches(alarm, start + datetime.timedelta(minutes=m))
        ]
        assert hits == [datetime.datetime(2026, 10, 19, 23, 59)]
