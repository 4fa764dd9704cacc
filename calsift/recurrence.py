"""
Tool: Recurrence Describer
Purpose: Turn a structured recurrence rule into an English phrase

Usage:
    from calsift.models import Frequency, RecurrenceDay, RecurrenceRuleComponents, Weekday
    from calsift.recurrence import describe

    describe(RecurrenceRuleComponents(
        frequency=Frequency.WEEKLY,
        days_of_week=[RecurrenceDay(Weekday.MONDAY), RecurrenceDay(Weekday.WEDNESDAY)],
    ))
    # -> "Every week on Monday and Wednesday"

Day-of-week values use Sunday=1 through Saturday=7. A week number of -1
means "last". The interval is assumed positive; it is not re-validated.
"""

from calsift.models import (
    MONTH_NAMES,
    WEEKDAYS,
    Frequency,
    RecurrenceDay,
    RecurrenceRuleComponents,
    Weekday,
)


FALLBACK_PHRASE = "Repeats"


# =============================================================================
# Helpers
# =============================================================================


def day_name(day: int) -> str:
    try:
        return Weekday(day).display_name
    except ValueError:
        return f"Day {day}"


def month_name(month: int) -> str:
    if 1 <= month <= 12:
        return MONTH_NAMES[month - 1]
    return f"Month {month}"


def ordinal(n: int) -> str:
    """English ordinal: 1st, 2nd, 3rd, 4th, 11th, 21st; -1 is "last"."""
    if n == -1:
        return "last"
    n = abs(n)
    if n % 100 in (11, 12, 13):
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def join_list(items: list[str]) -> str:
    """'A', 'A and B', 'A, B, and C'."""
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return f"{items[0]} and {items[1]}"
    return ", ".join(items[:-1]) + f", and {items[-1]}"


def _base(interval: int, unit: str) -> str:
    if interval == 1:
        return f"Every {unit}"
    return f"Every {interval} {unit}s"


def _days(rule: RecurrenceRuleComponents) -> list[RecurrenceDay]:
    return [RecurrenceDay(*d) for d in rule.days_of_week or []]


# =============================================================================
# Per-frequency phrases
# =============================================================================


def _describe_daily(rule: RecurrenceRuleComponents) -> str:
    return _base(rule.interval, "day")


def _describe_weekly(rule: RecurrenceRuleComponents) -> str:
    base = _base(rule.interval, "week")
    days = _days(rule)
    if not days:
        return base

    day_numbers = [d.day_of_week for d in days]
    if len(day_numbers) == 5 and set(day_numbers) == WEEKDAYS:
        return "Every weekday" if rule.interval == 1 else f"{base} on weekdays"

    return f"{base} on {join_list([day_name(d) for d in day_numbers])}"


def _describe_monthly(rule: RecurrenceRuleComponents) -> str:
    base = _base(rule.interval, "month")

    days = _days(rule)
    if days and days[0].week_number != 0:
        first = days[0]
        return f"{base} on the {ordinal(first.week_number)} {day_name(first.day_of_week)}"

    if rule.days_of_month:
        return f"{base} on the {join_list([ordinal(d) for d in rule.days_of_month])}"

    return base


def _describe_yearly(rule: RecurrenceRuleComponents) -> str:
    base = _base(rule.interval, "year")
    if rule.months_of_year:
        return f"{base} in {join_list([month_name(m) for m in rule.months_of_year])}"
    return base


_DESCRIBERS = {
    Frequency.DAILY: _describe_daily,
    Frequency.WEEKLY: _describe_weekly,
    Frequency.MONTHLY: _describe_monthly,
    Frequency.YEARLY: _describe_yearly,
}


def describe(rule: RecurrenceRuleComponents) -> str:
    """Human-readable phrase for a recurrence rule; never raises for a known shape."""
    try:
        frequency = Frequency(rule.frequency)
    except ValueError:
        return FALLBACK_PHRASE
    return _DESCRIBERS[frequency](rule)
