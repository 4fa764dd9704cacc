"""Event grouping: Day buckets, calendars and weeks

Components:
    dates.py: Assign events to every calendar day they cover
    calendars.py: Group events by owning calendar
    weeks.py: Calendar.app-compatible week numbers

These are display helpers: they never drop events for scheduling
reasons and are independent of the scheduling filter.
"""

from calsift.grouping.calendars import group_by_calendar
from calsift.grouping.dates import MAX_EVENT_SPAN_DAYS, effective_day_span, group_by_date
from calsift.grouping.weeks import week_info


__all__ = [
    "MAX_EVENT_SPAN_DAYS",
    "effective_day_span",
    "group_by_calendar",
    "group_by_date",
    "week_info",
]
