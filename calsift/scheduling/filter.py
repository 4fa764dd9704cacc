"""
Scheduling filter: which events occupy real busy time.

An event is left out of conflict and free-time analysis when it is
canceled, marked "show as free", or the current user declined it.
"""

from collections.abc import Iterable

from calsift.models import AttendeeStatus, Availability, CalendarEvent, EventStatus


def is_schedulable(event: CalendarEvent) -> bool:
    if event.status == EventStatus.CANCELED:
        return False

    if event.availability == Availability.FREE:
        return False

    me = event.current_user_attendee
    if me is not None and me.status == AttendeeStatus.DECLINED:
        return False

    return True


def filter_for_scheduling(events: Iterable[CalendarEvent]) -> list[CalendarEvent]:
    """Keep schedulable events, preserving their order."""
    return [event for event in events if is_schedulable(event)]
