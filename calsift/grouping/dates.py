"""
Tool: Date Bucket Grouper
Purpose: Group events under every calendar day they occupy

Day keys are always ``YYYY-MM-DD`` in the caller's timezone; presentation
layers join on this key to line events up with date headers.

Span rules:
- All-day events store an exclusive end (midnight after the last day),
  so their last bucket is the day before ``end``.
- Timed events ending exactly at local midnight after crossing into a
  later day stop on the previous day instead of spilling over.

Usage:
    from calsift.grouping.dates import group_by_date

    for group in group_by_date(events, from_=start, to=end, show_empty_dates=True, tz=tz):
        print(group.date, len(group.events))
"""

from collections.abc import Sequence
from datetime import date, datetime, timedelta, tzinfo

from calsift.logging_config import get_logger
from calsift.models import CalendarEvent, DateGroup
from calsift.timeutil import is_midnight, iter_days, local_day


logger = get_logger(__name__)

# Upper bound on buckets a single event may fill (about ten years)
MAX_EVENT_SPAN_DAYS = 3660

ONE_DAY = timedelta(days=1)


def effective_day_span(event: CalendarEvent, tz: tzinfo | None = None) -> tuple[date, date]:
    """
    First and last calendar day an event belongs to, before range clipping.

    The last day may precede the first for inverted or zero-length
    all-day events; such events occupy no bucket.
    """
    first = local_day(event.start, tz)
    end_day = local_day(event.end, tz)

    if event.all_day:
        return first, end_day - ONE_DAY

    if is_midnight(event.end, tz) and end_day > first:
        return first, end_day - ONE_DAY

    return first, end_day


def _clip_span(
    event: CalendarEvent,
    from_: datetime | None,
    to: datetime | None,
    tz: tzinfo | None,
) -> tuple[date, date]:
    first, last = effective_day_span(event, tz)

    if from_ is not None:
        first = max(first, local_day(from_, tz))
    if to is not None:
        last = min(last, local_day(to, tz))

    if (last - first).days >= MAX_EVENT_SPAN_DAYS:
        logger.warning(
            "event_span_truncated",
            event_id=event.id,
            first_day=first.isoformat(),
            last_day=last.isoformat(),
            max_days=MAX_EVENT_SPAN_DAYS,
        )
        last = first + timedelta(days=MAX_EVENT_SPAN_DAYS - 1)

    return first, last


def group_by_date(
    events: Sequence[CalendarEvent],
    from_: datetime | None = None,
    to: datetime | None = None,
    show_empty_dates: bool = False,
    tz: tzinfo | None = None,
) -> list[DateGroup]:
    """
    Bucket events by calendar day.

    Args:
        events: Events in any order; each bucket keeps this order
        from_: Optional range start; no bucket before its day is created
        to: Optional range end; no bucket after its day is created
        show_empty_dates: With both bounds given, emit every day in range
            including days without events
        tz: Timezone that defines calendar days; defaults to the
            timezone of ``from_`` or ``to``

    Returns:
        DateGroups in chronological order
    """
    if tz is None:
        bound = from_ if from_ is not None else to
        tz = bound.tzinfo if bound is not None else None

    grouped: dict[str, list[CalendarEvent]] = {}

    for event in events:
        first, last = _clip_span(event, from_, to, tz)
        for day in iter_days(first, last):
            grouped.setdefault(day.isoformat(), []).append(event)

    if show_empty_dates and from_ is not None and to is not None:
        return [
            DateGroup(date=day.isoformat(), events=grouped.get(day.isoformat(), []))
            for day in iter_days(local_day(from_, tz), local_day(to, tz))
        ]

    return [DateGroup(date=key, events=grouped[key]) for key in sorted(grouped)]
