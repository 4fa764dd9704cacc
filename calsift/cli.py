#!/usr/bin/env python3
"""
Calsift Command Line Interface

Main entry point for the `calsift` command. Events are read from a JSON
export; results are printed as JSON.

Usage:
    calsift conflicts --events events.json --from today --to today+7
    calsift free --events events.json --from now --work-start 08:30 --min-duration 45
    calsift days --events events.json --from 2024-03-15 --to 2024-03-21 --show-empty-dates
    calsift -v calendars --events events.json
    calsift week --date 2024-12-30
    calsift recurrence --frequency monthly --days=-1:friday
"""

import argparse
import json
import sys
from dataclasses import dataclass
from datetime import datetime, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from calsift import __version__
from calsift.config_models import CalsiftConfig, load_and_validate
from calsift.date_parser import DateParseError, end_of_day, parse_date
from calsift.events import EventLoadError, EventQuery, load_events, localize_events, select_events
from calsift.grouping import group_by_calendar, group_by_date, week_info
from calsift.logging_config import bind_command, get_logger, setup_logging
from calsift.models import RecurrenceDay, RecurrenceRuleComponents, Weekday, WorkingHours
from calsift.recurrence import describe
from calsift.scheduling import find_conflicts, find_free_time


logger = get_logger(__name__)

WEEKDAY_ALIASES = {
    **{day.name.lower(): day for day in Weekday},
    **{day.name.lower()[:3]: day for day in Weekday},
}


class UsageError(ValueError):
    """Invalid combination or value of command line arguments."""


# ─────────────────────────────────────────────────────────────────────────────
# Option resolution
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class RuntimeOptions:
    """Config file defaults merged with command line flags (flags win)."""

    include_calendars: list[str] | None
    exclude_calendars: list[str] | None
    include_calendar_types: list[str] | None
    exclude_calendar_types: list[str] | None
    exclude_all_day: bool
    limit: int | None
    show_empty_dates: bool
    working_hours: WorkingHours
    min_duration: int
    timezone: str | None


def _csv(value: str | None) -> list[str] | None:
    if value is None:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]


def _first(*values):
    for value in values:
        if value is not None:
            return value
    return None


def resolve_options(config: CalsiftConfig, args: argparse.Namespace) -> RuntimeOptions:
    defaults = config.defaults
    free = config.free

    # conflicts and free skip all-day events unless asked to count them
    if hasattr(args, "include_all_day"):
        exclude_all_day = not args.include_all_day
    else:
        exclude_all_day = getattr(args, "exclude_all_day", False) or defaults.exclude_all_day

    work_start = _first(getattr(args, "work_start", None), free.work_start)
    work_end = _first(getattr(args, "work_end", None), free.work_end)
    working_hours = WorkingHours.parse(work_start, work_end)
    if working_hours is None:
        raise UsageError(f"Invalid working hours {work_start}-{work_end}; use HH:MM")

    min_duration = _first(getattr(args, "min_duration", None), free.min_duration)
    if min_duration < 0:
        raise UsageError("--min-duration must not be negative")

    return RuntimeOptions(
        include_calendars=_first(_csv(getattr(args, "calendar", None)), defaults.include_calendars or None),
        exclude_calendars=_first(_csv(getattr(args, "exclude_calendar", None)), defaults.exclude_calendars or None),
        include_calendar_types=_first(
            _csv(getattr(args, "calendar_type", None)), defaults.include_calendar_types or None
        ),
        exclude_calendar_types=_first(
            _csv(getattr(args, "exclude_calendar_type", None)), defaults.exclude_calendar_types or None
        ),
        exclude_all_day=exclude_all_day,
        limit=getattr(args, "limit", None),
        show_empty_dates=getattr(args, "show_empty_dates", False) or defaults.show_empty_dates,
        working_hours=working_hours,
        min_duration=min_duration,
        timezone=_first(getattr(args, "tz", None), defaults.timezone),
    )


def resolve_timezone(name: str | None) -> tzinfo:
    if not name:
        return datetime.now().astimezone().tzinfo
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise UsageError(f"Unknown timezone: {name}") from e


def resolve_range(args: argparse.Namespace, tz: tzinfo) -> tuple[datetime, datetime]:
    """``--from`` defaults to the start of today, ``--to`` to the end of the from day."""
    from_ = parse_date(args.from_ or "today", tz)
    to = parse_date(args.to, tz) if args.to else end_of_day(from_, tz)
    return from_, to


# ─────────────────────────────────────────────────────────────────────────────
# Commands
# ─────────────────────────────────────────────────────────────────────────────


def _load_selected(args, options: RuntimeOptions, tz: tzinfo, from_: datetime | None, to: datetime | None):
    events = localize_events(load_events(args.events), tz)
    query = EventQuery(
        from_=from_,
        to=to,
        include_calendars=options.include_calendars,
        exclude_calendars=options.exclude_calendars,
        include_calendar_types=options.include_calendar_types,
        exclude_calendar_types=options.exclude_calendar_types,
        exclude_all_day=options.exclude_all_day,
        limit=options.limit,
    )
    return select_events(events, query)


def cmd_conflicts(args, options: RuntimeOptions) -> dict:
    tz = resolve_timezone(options.timezone)
    from_, to = resolve_range(args, tz)
    events = _load_selected(args, options, tz, from_, to)
    return find_conflicts(events, from_, to).to_dict()


def cmd_free(args, options: RuntimeOptions) -> dict:
    tz = resolve_timezone(options.timezone)
    from_, to = resolve_range(args, tz)
    events = _load_selected(args, options, tz, from_, to)
    result = find_free_time(
        events,
        from_,
        to,
        working_hours=options.working_hours,
        min_duration=options.min_duration,
        tz=tz,
    )
    return result.to_dict()


def cmd_days(args, options: RuntimeOptions) -> dict:
    tz = resolve_timezone(options.timezone)
    from_, to = resolve_range(args, tz)
    events = _load_selected(args, options, tz, from_, to)
    groups = group_by_date(events, from_=from_, to=to, show_empty_dates=options.show_empty_dates, tz=tz)
    return {"days": [g.to_dict() for g in groups], "total": len(events)}


def cmd_calendars(args, options: RuntimeOptions) -> dict:
    tz = resolve_timezone(options.timezone)
    events = _load_selected(args, options, tz, None, None)
    return {"calendars": [g.to_dict() for g in group_by_calendar(events)]}


def cmd_week(args, options: RuntimeOptions) -> dict:
    tz = resolve_timezone(options.timezone)
    day = parse_date(args.date or "today", tz)
    return week_info(day, tz).to_dict()


def parse_recurrence_day(value: str) -> RecurrenceDay:
    """``monday``, ``mon``, ``2:tuesday`` or ``-1:friday``."""
    week_number = 0
    name = value.strip().lower()
    if ":" in name:
        number, name = name.split(":", 1)
        try:
            week_number = int(number)
        except ValueError as e:
            raise UsageError(f"Invalid week number in {value!r}") from e
    day = WEEKDAY_ALIASES.get(name)
    if day is None:
        raise UsageError(f"Unknown day of week: {value!r}")
    return RecurrenceDay(day, week_number)


def _int_list(value: str | None, flag: str) -> list[int] | None:
    parts = _csv(value)
    if parts is None:
        return None
    try:
        return [int(p) for p in parts]
    except ValueError as e:
        raise UsageError(f"{flag} expects comma-separated numbers") from e


def cmd_recurrence(args, options: RuntimeOptions) -> dict:
    if args.interval < 1:
        raise UsageError("--interval must be at least 1")
    days = _csv(args.days)
    rule = RecurrenceRuleComponents(
        frequency=args.frequency,
        interval=args.interval,
        days_of_week=[parse_recurrence_day(d) for d in days] if days else None,
        days_of_month=_int_list(args.month_days, "--month-days"),
        months_of_year=_int_list(args.months, "--months"),
    )
    return {"description": describe(rule)}


# ─────────────────────────────────────────────────────────────────────────────
# Parser
# ─────────────────────────────────────────────────────────────────────────────


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", default=None, help="Config file (default: args/calsift.yaml)")
    parser.add_argument("--tz", default=None, help="IANA timezone (default: config or system)")


def _add_range(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--from", dest="from_", default=None,
        help="Start date (ISO 8601, 'today', 'tomorrow', 'now', 'today+N')",
    )
    parser.add_argument("--to", default=None, help="End date (same formats as --from)")


def _add_event_filters(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--events", required=True, help="JSON file with the events to analyse")
    parser.add_argument("--calendar", default=None, help="Only these calendars (comma-separated titles)")
    parser.add_argument("--exclude-calendar", default=None, help="Skip these calendars (comma-separated titles)")
    parser.add_argument("--calendar-type", default=None, help="Only these calendar types (e.g. calDAV,icloud)")
    parser.add_argument("--exclude-calendar-type", default=None, help="Skip these calendar types")
    parser.add_argument("--limit", type=int, default=None, help="Max events considered")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="calsift",
        description="Calsift - conflicts, free time and day views for calendar events",
    )
    parser.add_argument(
        "--version", "-V", action="store_true", help="Show version and exit"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log debug events to stderr"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # conflicts
    conflicts_parser = subparsers.add_parser("conflicts", help="Find overlapping events")
    _add_common(conflicts_parser)
    _add_range(conflicts_parser)
    _add_event_filters(conflicts_parser)
    conflicts_parser.add_argument(
        "--include-all-day", action="store_true", help="Count all-day events as busy"
    )
    conflicts_parser.set_defaults(func=cmd_conflicts)

    # free
    free_parser = subparsers.add_parser("free", help="Find free time inside working hours")
    _add_common(free_parser)
    _add_range(free_parser)
    _add_event_filters(free_parser)
    free_parser.add_argument(
        "--include-all-day", action="store_true", help="Count all-day events as busy"
    )
    free_parser.add_argument("--min-duration", type=int, default=None, help="Shortest slot in minutes (default: 30)")
    free_parser.add_argument("--work-start", default=None, help="Working hours start, HH:MM (default: 09:00)")
    free_parser.add_argument("--work-end", default=None, help="Working hours end, HH:MM (default: 17:00)")
    free_parser.set_defaults(func=cmd_free)

    # days
    days_parser = subparsers.add_parser("days", help="Group events by calendar day")
    _add_common(days_parser)
    _add_range(days_parser)
    _add_event_filters(days_parser)
    days_parser.add_argument("--exclude-all-day", action="store_true", help="Leave out all-day events")
    days_parser.add_argument("--show-empty-dates", action="store_true", help="Emit days without events")
    days_parser.set_defaults(func=cmd_days)

    # calendars
    calendars_parser = subparsers.add_parser("calendars", help="Group events by calendar")
    _add_common(calendars_parser)
    _add_event_filters(calendars_parser)
    calendars_parser.add_argument("--exclude-all-day", action="store_true", help="Leave out all-day events")
    calendars_parser.set_defaults(func=cmd_calendars)

    # week
    week_parser = subparsers.add_parser("week", help="Show the week number for a date")
    _add_common(week_parser)
    week_parser.add_argument("--date", default=None, help="Date to look up (default: today)")
    week_parser.set_defaults(func=cmd_week)

    # recurrence
    recurrence_parser = subparsers.add_parser("recurrence", help="Describe a recurrence rule")
    _add_common(recurrence_parser)
    recurrence_parser.add_argument(
        "--frequency", required=True, choices=["daily", "weekly", "monthly", "yearly"]
    )
    recurrence_parser.add_argument("--interval", type=int, default=1)
    recurrence_parser.add_argument("--days", default=None, help="Days of week, e.g. mon,wed or -1:friday")
    recurrence_parser.add_argument("--month-days", default=None, help="Days of month, e.g. 1,15")
    recurrence_parser.add_argument("--months", default=None, help="Months of year, e.g. 1,7")
    recurrence_parser.set_defaults(func=cmd_recurrence)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(level="DEBUG" if args.verbose else None)

    if args.version:
        print(f"calsift {__version__}")
        return 0

    if not args.command:
        parser.print_help()
        return 0

    bind_command(args.command)
    config = load_and_validate("calsift", path=args.config)

    try:
        options = resolve_options(config, args)
        result = args.func(args, options)
    except (UsageError, DateParseError, EventLoadError) as e:
        logger.debug("command_failed", error=str(e))
        print(f"ERROR: {e}")
        return 1

    print(json.dumps(result, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
