"""
Timezone-aware day arithmetic shared by the day-oriented services.

Every helper takes the caller's timezone explicitly. Aware timestamps are
converted into it; naive timestamps are read as wall-clock time in it.
With ``tz=None`` timestamps are used exactly as given.
"""

from datetime import date, datetime, time, timedelta, timezone, tzinfo


def to_local(value: datetime, tz: tzinfo | None) -> datetime:
    """Express a timestamp as wall-clock time in ``tz``."""
    if tz is None:
        return value
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def instant(value: datetime) -> datetime:
    """
    The UTC instant of an aware timestamp; naive timestamps pass through.

    Aware values sharing one tzinfo compare by wall-clock time, which
    misorders the repeated hour when clocks fall back. Compare instants.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc)


def local_day(value: datetime, tz: tzinfo | None) -> date:
    """Calendar day a timestamp falls on in ``tz``."""
    return to_local(value, tz).date()


def at_time(day: date, hour: int, minute: int, tz: tzinfo | None) -> datetime:
    """Wall-clock ``hour:minute`` on ``day`` in ``tz``."""
    return datetime.combine(day, time(hour, minute), tzinfo=tz)


def start_of_day(day: date, tz: tzinfo | None) -> datetime:
    return at_time(day, 0, 0, tz)


def is_midnight(value: datetime, tz: tzinfo | None) -> bool:
    local = to_local(value, tz)
    return local.hour == 0 and local.minute == 0 and local.second == 0


def iter_days(first: date, last: date):
    """Yield each calendar day from ``first`` to ``last`` inclusive."""
    day = first
    while day <= last:
        yield day
        day += timedelta(days=1)


def minutes_between(start: datetime, end: datetime) -> int:
    """
    Whole minutes from ``start`` to ``end``, truncated.

    Aware timestamps are compared as UTC instants so that a DST change
    inside the interval is counted correctly.
    """
    return int((instant(end) - instant(start)).total_seconds()) // 60
