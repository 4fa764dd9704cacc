"""Tests for calsift/grouping/dates.py"""

from datetime import date, datetime
from unittest.mock import patch
from zoneinfo import ZoneInfo

from calsift.grouping import MAX_EVENT_SPAN_DAYS, effective_day_span, group_by_date


def keys(groups) -> list[str]:
    return [g.date for g in groups]


class TestEffectiveDaySpan:
    def test_all_day_end_is_exclusive(self, make_event):
        event = make_event("Trip", datetime(2024, 3, 15), datetime(2024, 3, 18), all_day=True)
        assert effective_day_span(event) == (date(2024, 3, 15), date(2024, 3, 17))

    def test_timed_event_ending_at_midnight_stays_on_start_day(self, make_event):
        event = make_event("Late shift", datetime(2024, 3, 15, 22, 0), datetime(2024, 3, 16, 0, 0))
        assert effective_day_span(event) == (date(2024, 3, 15), date(2024, 3, 15))

    def test_timed_event_past_midnight_spills_over(self, make_event):
        event = make_event("Party", datetime(2024, 3, 15, 22, 0), datetime(2024, 3, 16, 1, 0))
        assert effective_day_span(event) == (date(2024, 3, 15), date(2024, 3, 16))

    def test_zero_length_event_at_midnight(self, make_event):
        midnight = datetime(2024, 3, 16, 0, 0)
        event = make_event("Marker", midnight, midnight)
        assert effective_day_span(event) == (date(2024, 3, 16), date(2024, 3, 16))

    def test_days_taken_in_given_timezone(self, make_event, tz):
        utc = ZoneInfo("UTC")
        event = make_event(
            "Evening call",
            datetime(2024, 3, 16, 2, 0, tzinfo=utc),
            datetime(2024, 3, 16, 3, 0, tzinfo=utc),
        )
        assert effective_day_span(event, tz) == (date(2024, 3, 15), date(2024, 3, 15))


class TestGroupByDate:
    """Tests for bucketing events under each day they occupy."""

    def test_multi_day_all_day_event(self, make_event):
        """All-day Mar 15 to Mar 18 (exclusive) fills three buckets."""
        event = make_event("Trip", datetime(2024, 3, 15), datetime(2024, 3, 18), all_day=True)

        groups = group_by_date([event])

        assert keys(groups) == ["2024-03-15", "2024-03-16", "2024-03-17"]
        assert all(g.events == [event] for g in groups)

    def test_midnight_end_not_in_next_day(self, make_event):
        event = make_event("Late shift", datetime(2024, 3, 15, 22, 0), datetime(2024, 3, 16, 0, 0))
        assert keys(group_by_date([event])) == ["2024-03-15"]

    def test_zero_length_all_day_event_has_no_bucket(self, make_event):
        day = datetime(2024, 3, 15)
        event = make_event("Empty", day, day, all_day=True)
        assert group_by_date([event]) == []

    def test_clipped_to_range(self, make_event):
        event = make_event("Sprint", datetime(2024, 3, 10), datetime(2024, 3, 21), all_day=True)

        groups = group_by_date(
            [event],
            from_=datetime(2024, 3, 15, 0, 0),
            to=datetime(2024, 3, 16, 23, 59),
        )

        assert keys(groups) == ["2024-03-15", "2024-03-16"]

    def test_show_empty_dates_fills_range(self, make_event):
        event = make_event("Lunch", datetime(2024, 3, 16, 12, 0))

        groups = group_by_date(
            [event],
            from_=datetime(2024, 3, 15),
            to=datetime(2024, 3, 17, 23, 59),
            show_empty_dates=True,
        )

        assert keys(groups) == ["2024-03-15", "2024-03-16", "2024-03-17"]
        assert [len(g.events) for g in groups] == [0, 1, 0]

    def test_show_empty_dates_needs_both_bounds(self, make_event):
        event = make_event("Lunch", datetime(2024, 3, 16, 12, 0))
        groups = group_by_date([event], from_=datetime(2024, 3, 15), show_empty_dates=True)
        assert keys(groups) == ["2024-03-16"]

    def test_bucket_order_follows_input_order(self, make_event):
        late = make_event("Late", datetime(2024, 3, 15, 16, 0))
        early = make_event("Early", datetime(2024, 3, 15, 8, 0))

        groups = group_by_date([late, early])

        assert [e.title for e in groups[0].events] == ["Late", "Early"]

    def test_buckets_sorted_chronologically(self, make_event):
        events = [
            make_event("B", datetime(2024, 3, 20, 9, 0)),
            make_event("A", datetime(2024, 3, 2, 9, 0)),
        ]
        assert keys(group_by_date(events)) == ["2024-03-02", "2024-03-20"]

    def test_keys_use_given_timezone(self, make_event, tz):
        utc = ZoneInfo("UTC")
        event = make_event("Evening call", datetime(2024, 3, 16, 2, 0, tzinfo=utc))
        assert keys(group_by_date([event], tz=tz)) == ["2024-03-15"]

    def test_pathological_span_is_capped(self, make_event):
        event = make_event("Forever", datetime(2000, 1, 1), datetime(2040, 1, 1), all_day=True)

        with patch("calsift.grouping.dates.logger") as mock_logger:
            groups = group_by_date([event])

        assert len(groups) == MAX_EVENT_SPAN_DAYS
        assert groups[0].date == "2000-01-01"
        mock_logger.warning.assert_called_once()
        args, kwargs = mock_logger.warning.call_args
        assert args == ("event_span_truncated",)
        assert kwargs["event_id"] == event.id
        assert kwargs["max_days"] == MAX_EVENT_SPAN_DAYS

    def test_long_span_within_cap_not_logged(self, make_event):
        event = make_event("Sabbatical", datetime(2024, 1, 1), datetime(2025, 1, 1), all_day=True)

        with patch("calsift.grouping.dates.logger") as mock_logger:
            groups = group_by_date([event])

        assert len(groups) == 366
        mock_logger.warning.assert_not_called()

    def test_zone_taken_from_aware_range(self, make_event, tz):
        """Without ``tz`` the bounds' own timezone defines the day keys."""
        utc = ZoneInfo("UTC")
        event = make_event("Evening call", datetime(2024, 3, 16, 2, 0, tzinfo=utc))

        groups = group_by_date(
            [event],
            from_=datetime(2024, 3, 15, tzinfo=tz),
            to=datetime(2024, 3, 16, 23, 59, tzinfo=tz),
        )

        assert keys(groups) == ["2024-03-15"]

    def test_empty_input(self):
        assert group_by_date([]) == []
