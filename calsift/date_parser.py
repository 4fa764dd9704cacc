"""
Parse the date arguments accepted on the command line.

Accepted forms: ``now``, ``today``, ``tomorrow``, ``yesterday``,
``today+N``, ``today-N``, ISO dates (``2024-03-15``) and ISO timestamps
(``2024-03-15T09:00:00``, with or without an offset). Naive values are
read as wall-clock time in the given timezone.
"""

import re
from datetime import date, datetime, time, timedelta, tzinfo

from calsift.timeutil import start_of_day, to_local


RELATIVE_PATTERN = re.compile(r"^today([+-])(\d+)$")


class DateParseError(ValueError):
    def __init__(self, value: str):
        super().__init__(
            f"Invalid date format: '{value}'. Use ISO 8601 (2024-03-15), 'today', "
            "'tomorrow', 'yesterday', 'now', or 'today+N'/'today-N'."
        )
        self.value = value


def parse_date(value: str, tz: tzinfo | None = None, now: datetime | None = None) -> datetime:
    """
    Resolve a date argument to a timestamp in ``tz``.

    Args:
        value: Text from the command line
        tz: Timezone for naive and relative values
        now: Current time override (tests)

    Raises:
        DateParseError: If the text matches none of the accepted forms
    """
    text = value.strip().lower()
    current = to_local(now, tz) if now is not None else datetime.now(tz)
    today = current.date()

    if text == "now":
        return current
    if text == "today":
        return start_of_day(today, tz)
    if text == "tomorrow":
        return start_of_day(today + timedelta(days=1), tz)
    if text == "yesterday":
        return start_of_day(today - timedelta(days=1), tz)

    match = RELATIVE_PATTERN.match(text)
    if match:
        days = int(match.group(2))
        if match.group(1) == "-":
            days = -days
        return start_of_day(today + timedelta(days=days), tz)

    try:
        if len(text) == 10:
            return start_of_day(date.fromisoformat(text), tz)
        return to_local(datetime.fromisoformat(value.strip()), tz)
    except ValueError:
        raise DateParseError(value) from None


def end_of_day(value: datetime, tz: tzinfo | None = None) -> datetime:
    """23:59:59 on the calendar day of ``value``."""
    day = to_local(value, tz).date()
    return datetime.combine(day, time(23, 59, 59), tzinfo=tz)
