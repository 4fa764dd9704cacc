"""
Tool: Free Time Finder
Purpose: Report free gaps inside daily working hours

For every calendar day in the queried range, the working window is
computed in the caller's timezone, busy events are clipped to it and
merged, and the gaps between busy blocks become free slots. Every day in
range gets an entry, even when it has no free time.

Usage:
    from zoneinfo import ZoneInfo
    from calsift.models import WorkingHours
    from calsift.scheduling.free_time import find_free_time

    result = find_free_time(
        events,
        from_=now,
        to=end_of_week,
        working_hours=WorkingHours.parse("09:00", "17:00"),
        min_duration=30,
        tz=ZoneInfo("America/New_York"),
    )
"""

from collections.abc import Sequence
from datetime import date, datetime, tzinfo
from typing import NamedTuple

from calsift.logging_config import get_logger
from calsift.models import (
    DEFAULT_WORKING_HOURS,
    MONTH_NAMES,
    CalendarEvent,
    DateRange,
    DayFreeSlots,
    DurationTier,
    FreeSlot,
    FreeTimeResult,
    Weekday,
    WorkingHours,
)
from calsift.scheduling.filter import filter_for_scheduling
from calsift.timeutil import at_time, instant, iter_days, local_day, minutes_between, to_local


logger = get_logger(__name__)

DEFAULT_MIN_DURATION = 30


class BusyBlock(NamedTuple):
    start: datetime
    end: datetime


def day_label(day: date) -> str:
    """Fixed English label such as ``Friday, Mar 15, 2024``."""
    weekday = Weekday.from_date(day)
    month = MONTH_NAMES[day.month - 1][:3]
    return f"{weekday.display_name}, {month} {day.day}, {day.year}"


def merge_busy_blocks(
    events: Sequence[CalendarEvent],
    window_start: datetime,
    window_end: datetime,
    tz: tzinfo | None = None,
) -> list[BusyBlock]:
    """
    Clip events to the window and merge overlapping or touching intervals.

    Events left with no positive width after clipping are dropped. Blocks
    keep local timestamps but are ordered and merged on real instants.
    """
    clipped = []
    for event in events:
        start = max(to_local(event.start, tz), window_start, key=instant)
        end = min(to_local(event.end, tz), window_end, key=instant)
        if instant(start) < instant(end):
            clipped.append(BusyBlock(start, end))
    clipped.sort(key=lambda b: instant(b.start))

    merged: list[BusyBlock] = []
    for block in clipped:
        # <= so that back-to-back events form one busy block
        if merged and instant(block.start) <= instant(merged[-1].end):
            last = merged[-1]
            merged[-1] = BusyBlock(last.start, max(last.end, block.end, key=instant))
        else:
            merged.append(block)
    return merged


def _make_slot(start: datetime, end: datetime, min_duration: int) -> FreeSlot | None:
    minutes = minutes_between(start, end)
    if minutes < min_duration:
        return None
    return FreeSlot(
        start=start,
        end=end,
        duration_minutes=minutes,
        tier=DurationTier.for_minutes(minutes),
    )


def find_slots(
    busy_blocks: Sequence[BusyBlock],
    window_start: datetime,
    window_end: datetime,
    min_duration: int,
) -> list[FreeSlot]:
    """Gaps between merged busy blocks that last at least ``min_duration`` minutes."""
    slots = []
    cursor = window_start

    for block in busy_blocks:
        if instant(cursor) < instant(block.start):
            slot = _make_slot(cursor, block.start, min_duration)
            if slot:
                slots.append(slot)
        cursor = max(cursor, block.end, key=instant)

    if instant(cursor) < instant(window_end):
        slot = _make_slot(cursor, window_end, min_duration)
        if slot:
            slots.append(slot)

    return slots


def _working_window(
    day: date,
    from_: datetime,
    working_hours: WorkingHours,
    tz: tzinfo | None,
) -> tuple[datetime, datetime]:
    window_start = at_time(day, working_hours.start_hour, working_hours.start_minute, tz)
    window_end = at_time(day, working_hours.end_hour, working_hours.end_minute, tz)

    # A mid-day `from` (e.g. "now") trims the start of its own day only
    local_from = to_local(from_, tz)
    if local_from.date() == day and instant(local_from) > instant(window_start):
        window_start = local_from

    return window_start, window_end


def compute_free_days(
    events: Sequence[CalendarEvent],
    from_: datetime,
    to: datetime,
    working_hours: WorkingHours = DEFAULT_WORKING_HOURS,
    min_duration: int = DEFAULT_MIN_DURATION,
    tz: tzinfo | None = None,
) -> list[DayFreeSlots]:
    """
    Free slots for each calendar day from ``from_`` to ``to`` inclusive.

    Args:
        events: Events already passed through the scheduling filter
        from_: Start of the range; its own day is clipped to start no
            earlier than this instant
        to: End of the range; only its calendar day matters
        working_hours: Daily working window
        min_duration: Shortest gap, in minutes, reported as a slot
        tz: Timezone that defines calendar days and working hours;
            defaults to the timezone of ``from_``

    Returns:
        One DayFreeSlots per day, in order
    """
    if tz is None:
        tz = from_.tzinfo

    days = []

    for day in iter_days(local_day(from_, tz), local_day(to, tz)):
        window_start, window_end = _working_window(day, from_, working_hours, tz)

        slots: list[FreeSlot] = []
        if instant(window_start) < instant(window_end):
            day_events = [
                e for e in events
                if instant(to_local(e.start, tz)) < instant(window_end)
                and instant(to_local(e.end, tz)) > instant(window_start)
            ]
            busy = merge_busy_blocks(day_events, window_start, window_end, tz)
            slots = find_slots(busy, window_start, window_end, min_duration)

        days.append(
            DayFreeSlots(
                date=day,
                date_label=day_label(day),
                slots=slots,
                total_free_minutes=sum(s.duration_minutes for s in slots),
            )
        )

    return days


def find_free_time(
    events: Sequence[CalendarEvent],
    from_: datetime,
    to: datetime,
    working_hours: WorkingHours = DEFAULT_WORKING_HOURS,
    min_duration: int = DEFAULT_MIN_DURATION,
    tz: tzinfo | None = None,
) -> FreeTimeResult:
    """
    Filter events and build the full free-time report for a range.

    Returns:
        FreeTimeResult with per-day slots and the grand total
    """
    busy = filter_for_scheduling(events)
    days = compute_free_days(busy, from_, to, working_hours, min_duration, tz)
    total = sum(d.total_free_minutes for d in days)

    logger.debug(
        "free_time_computed",
        events_in=len(events),
        events_busy=len(busy),
        days=len(days),
        total_free_minutes=total,
        working_hours=str(working_hours),
    )

    return FreeTimeResult(
        days=days,
        total_free_minutes=total,
        working_hours=working_hours,
        min_duration_minutes=min_duration,
        date_range=DateRange(from_=from_, to=to),
    )
