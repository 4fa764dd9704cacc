"""Tests for calsift/models.py"""

import json
from datetime import date, datetime

import pytest

from calsift.models import (
    Attendee,
    AttendeeRole,
    AttendeeStatus,
    Availability,
    CalendarEvent,
    CalendarInfo,
    EventStatus,
    Weekday,
    WorkingHours,
)


@pytest.fixture
def event_dict() -> dict:
    return {
        "id": "evt-42",
        "title": "Design review",
        "start": "2024-03-15T10:00:00-04:00",
        "end": "2024-03-15T11:00:00-04:00",
        "calendar": {"id": "cal-work", "title": "Work", "type": "exchange"},
        "attendees": [
            {"name": "Me", "status": "accepted", "role": "chair", "is_current_user": True},
            {"name": "Sam", "status": "bogus"},
        ],
        "organizer": {"name": "Me", "email": "me@example.com"},
        "recurrence": {"is_recurring": True, "description": "Every week"},
        "status": "confirmed",
        "availability": "busy",
    }


class TestCalendarEvent:
    def test_from_dict(self, event_dict):
        event = CalendarEvent.from_dict(event_dict)

        assert event.start == datetime.fromisoformat("2024-03-15T10:00:00-04:00")
        assert event.calendar == CalendarInfo(id="cal-work", title="Work", type="exchange")
        assert event.attendees[0].role == AttendeeRole.CHAIR
        assert event.attendees[1].status == AttendeeStatus.UNKNOWN
        assert event.organizer.email == "me@example.com"
        assert event.recurrence.is_recurring is True
        assert event.status == EventStatus.CONFIRMED
        assert event.availability == Availability.BUSY

    def test_defaults(self):
        event = CalendarEvent.from_dict(
            {"id": "1", "title": "Block", "start": "2024-03-15T09:00:00", "end": "2024-03-15T10:00:00"}
        )
        assert event.all_day is False
        assert event.status == EventStatus.NONE
        assert event.availability == Availability.BUSY
        assert event.attendees == []

    def test_unknown_availability_maps_to_not_applicable(self, event_dict):
        event_dict["availability"] = "sometimes"
        assert CalendarEvent.from_dict(event_dict).availability == Availability.NOT_APPLICABLE

    def test_missing_start_raises(self, event_dict):
        del event_dict["start"]
        with pytest.raises(ValueError, match="start"):
            CalendarEvent.from_dict(event_dict)

    def test_round_trip_through_json(self, event_dict):
        event = CalendarEvent.from_dict(event_dict)
        assert CalendarEvent.from_dict(json.loads(event.to_json())) == event

    def test_current_user_attendee(self, event_dict):
        event = CalendarEvent.from_dict(event_dict)
        assert event.current_user_attendee.name == "Me"

    def test_no_current_user_attendee(self, make_event):
        event = make_event("Solo", datetime(2024, 3, 15, 9), attendees=[Attendee(name="Sam")])
        assert event.current_user_attendee is None


class TestWeekday:
    def test_numbering_starts_on_sunday(self):
        assert Weekday.SUNDAY == 1
        assert Weekday.SATURDAY == 7

    def test_from_date(self):
        assert Weekday.from_date(date(2024, 3, 17)) == Weekday.SUNDAY
        assert Weekday.from_date(date(2024, 3, 15)) == Weekday.FRIDAY

    def test_display_name(self):
        assert Weekday.WEDNESDAY.display_name == "Wednesday"


class TestWorkingHours:
    def test_default(self):
        assert str(WorkingHours()) == "09:00-17:00"

    def test_parse_valid(self):
        hours = WorkingHours.parse("08:30", "18:15")
        assert (hours.start_hour, hours.start_minute, hours.end_hour, hours.end_minute) == (8, 30, 18, 15)
        assert hours.start_label == "08:30"

    @pytest.mark.parametrize(
        "start,end",
        [("24:00", "17:00"), ("09:60", "17:00"), ("9", "17:00"), ("nine:00", "17:00"), ("09:00", "")],
    )
    def test_parse_invalid(self, start, end):
        assert WorkingHours.parse(start, end) is None
