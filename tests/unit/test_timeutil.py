"""Tests for calsift/timeutil.py"""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from calsift.timeutil import (
    at_time,
    instant,
    is_midnight,
    iter_days,
    local_day,
    minutes_between,
    to_local,
)


class TestToLocal:
    def test_naive_gets_zone(self, tz):
        assert to_local(datetime(2024, 3, 15, 9), tz) == datetime(2024, 3, 15, 9, tzinfo=tz)

    def test_aware_converted(self, tz):
        value = to_local(datetime(2024, 3, 15, 13, tzinfo=ZoneInfo("UTC")), tz)
        assert (value.hour, value.tzinfo) == (9, tz)

    def test_no_zone_is_identity(self):
        value = datetime(2024, 3, 15, 9)
        assert to_local(value, None) is value


class TestDayHelpers:
    def test_local_day(self, tz):
        assert local_day(datetime(2024, 3, 16, 3, tzinfo=ZoneInfo("UTC")), tz) == date(2024, 3, 15)

    def test_is_midnight(self, tz):
        assert is_midnight(at_time(date(2024, 3, 16), 0, 0, tz), tz) is True
        assert is_midnight(datetime(2024, 3, 16, 0, 0, 1, tzinfo=tz), tz) is False

    def test_iter_days_inclusive(self):
        assert list(iter_days(date(2024, 2, 28), date(2024, 3, 1))) == [
            date(2024, 2, 28),
            date(2024, 2, 29),
            date(2024, 3, 1),
        ]

    def test_iter_days_empty_when_inverted(self):
        assert list(iter_days(date(2024, 3, 2), date(2024, 3, 1))) == []


class TestMinutesBetween:
    def test_truncates(self):
        assert minutes_between(datetime(2024, 3, 15, 9, 0), datetime(2024, 3, 15, 9, 1, 59)) == 1

    def test_fall_back_day_is_longer(self, tz):
        # 2024-11-03 repeats the 01:00 hour in New York
        start = at_time(date(2024, 11, 3), 0, 0, tz)
        end = at_time(date(2024, 11, 3), 4, 0, tz)
        assert minutes_between(start, end) == 300


class TestInstant:
    def test_aware_converted_to_utc(self, tz):
        value = instant(datetime(2024, 3, 15, 9, 0, tzinfo=tz))
        assert value == datetime(2024, 3, 15, 13, 0, tzinfo=timezone.utc)
        assert value.tzinfo is timezone.utc

    def test_naive_passes_through(self):
        value = datetime(2024, 3, 15, 9, 0)
        assert instant(value) is value

    def test_repeated_hour_told_apart_by_fold(self, tz):
        first = datetime(2024, 11, 3, 1, 30, tzinfo=tz)
        second = datetime(2024, 11, 3, 1, 30, fold=1, tzinfo=tz)

        # Same zone: compared on wall-clock time
        assert first == second
        assert instant(second) - instant(first) == timedelta(hours=1)
