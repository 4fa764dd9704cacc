"""
Tool: Event Selection
Purpose: Narrow, order and load calendar events before analysis

The analysis services expect events that already fall in the queried
range and are sorted by start. This module applies the calendar name and
type filters, the all-day switch, ordering and limits that the event
source is responsible for, and loads events from a JSON export.

Usage:
    from calsift.events import EventQuery, load_events, select_events

    events = load_events("events.json")
    events = select_events(events, EventQuery(from_=start, to=end, exclude_all_day=True))
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import datetime, tzinfo
from pathlib import Path

from calsift.logging_config import get_logger
from calsift.meeting_url import extract_meeting_url
from calsift.models import CalendarEvent, CalendarInfo
from calsift.timeutil import instant, to_local


logger = get_logger(__name__)


class EventLoadError(Exception):
    """Raised when an events file cannot be read or parsed."""


@dataclass(frozen=True)
class EventQuery:
    """
    Event selection options.

    Calendar names and types match case-insensitively. The type alias
    ``icloud`` matches calDAV calendars whose source is iCloud.
    """

    from_: datetime | None = None
    to: datetime | None = None
    include_calendars: list[str] | None = None
    exclude_calendars: list[str] | None = None
    include_calendar_types: list[str] | None = None
    exclude_calendar_types: list[str] | None = None
    exclude_all_day: bool = False
    limit: int | None = None


def calendar_type_tokens(calendar: CalendarInfo) -> set[str]:
    tokens = {calendar.type.lower()}
    if calendar.type.lower() == "caldav" and calendar.source.lower() == "icloud":
        tokens.add("icloud")
    return tokens


def _lowered(values: list[str] | None) -> set[str]:
    return {v.lower() for v in values or []}


def _in_range(event: CalendarEvent, query: EventQuery) -> bool:
    if query.to is not None and not instant(event.start) < instant(query.to):
        return False
    if query.from_ is not None and not instant(event.end) > instant(query.from_):
        return False
    return True


def select_events(events: Iterable[CalendarEvent], query: EventQuery) -> list[CalendarEvent]:
    """
    Apply range, calendar and all-day filters, then sort and limit.

    Events are ordered by start time, then case-insensitive title.
    """
    include = _lowered(query.include_calendars)
    exclude = _lowered(query.exclude_calendars)
    include_types = _lowered(query.include_calendar_types)
    exclude_types = _lowered(query.exclude_calendar_types)

    selected = []
    for event in events:
        if not _in_range(event, query):
            continue
        title = event.calendar.title.lower()
        if include and title not in include:
            continue
        if exclude and title in exclude:
            continue
        tokens = calendar_type_tokens(event.calendar)
        if include_types and not tokens & include_types:
            continue
        if exclude_types and tokens & exclude_types:
            continue
        if query.exclude_all_day and event.all_day:
            continue
        selected.append(event)

    selected.sort(key=lambda e: (instant(e.start), e.title.casefold()))

    if query.limit is not None and query.limit > 0:
        selected = selected[: query.limit]

    return selected


def with_meeting_url(event: CalendarEvent) -> CalendarEvent:
    """Return the event with ``meeting_url`` detected from its text fields if unset."""
    if event.meeting_url:
        return event
    url = extract_meeting_url(url=event.url, location=event.location, notes=event.notes)
    if url is None:
        return event
    return replace(event, meeting_url=url)


def localize_events(events: Iterable[CalendarEvent], tz: tzinfo | None) -> list[CalendarEvent]:
    """Express every event start and end as wall-clock time in ``tz``."""
    if tz is None:
        return list(events)
    return [replace(e, start=to_local(e.start, tz), end=to_local(e.end, tz)) for e in events]


def load_events(path: str | Path) -> list[CalendarEvent]:
    """
    Load events from a JSON file holding a list of event objects.

    Raises:
        EventLoadError: If the file is missing, not JSON, or an entry
            does not describe an event
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise EventLoadError(f"Could not read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise EventLoadError(f"Invalid JSON in {path}: {e}") from e

    if isinstance(raw, dict):
        raw = raw.get("events", [])
    if not isinstance(raw, list):
        raise EventLoadError(f"Expected a list of events in {path}")

    events = []
    for index, item in enumerate(raw):
        try:
            events.append(with_meeting_url(CalendarEvent.from_dict(item)))
        except (TypeError, ValueError, AttributeError) as e:
            raise EventLoadError(f"Invalid event at index {index} in {path}: {e}") from e

    logger.debug("events_loaded", path=str(path), count=len(events))
    return events
