"""Group events by the calendar that owns them."""

from collections.abc import Sequence

from calsift.models import CalendarEvent, CalendarGroup
from calsift.timeutil import instant


def group_by_calendar(events: Sequence[CalendarEvent]) -> list[CalendarGroup]:
    """
    One group per calendar id, sorted by calendar title (case-insensitive).

    Events inside a group are sorted by start time.
    """
    grouped: dict[str, list[CalendarEvent]] = {}
    for event in events:
        grouped.setdefault(event.calendar.id, []).append(event)

    groups = [
        CalendarGroup(
            calendar=members[0].calendar,
            events=sorted(members, key=lambda e: instant(e.start)),
        )
        for members in grouped.values()
    ]
    groups.sort(key=lambda g: g.calendar.title.casefold())
    return groups
