"""
Week numbers as shown by Calendar.app.

Weeks run Sunday through Saturday and January 1 is always in week 1, so a
week that straddles New Year belongs to the new year.
"""

from datetime import date, datetime, timedelta, tzinfo

from calsift.models import WeekInfo
from calsift.timeutil import local_day


def week_info(value: date | datetime, tz: tzinfo | None = None) -> WeekInfo:
    day = local_day(value, tz) if isinstance(value, datetime) else value

    days_from_sunday = day.isoweekday() % 7
    sunday = day - timedelta(days=days_from_sunday)
    saturday = sunday + timedelta(days=6)

    # The week's Saturday always lies in the year that owns the week,
    # and the first Saturday of a year closes week 1.
    week = (saturday.timetuple().tm_yday - 1) // 7 + 1

    return WeekInfo(week=week, year=saturday.year, start_date=sunday, end_date=saturday)
