"""
Tool: Calsift Models
Purpose: Data structures for calendar events and scheduling analysis results

Usage:
    from calsift.models import CalendarEvent, ConflictResult, FreeTimeResult, WorkingHours

This module provides the foundation data structures shared by every
analysis service. Inputs (events, calendars, attendees, recurrence rules)
and results (conflict groups, free slots, day buckets) are frozen
dataclasses: services read them and build new ones, never mutate them.
"""

import json
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum, IntEnum
from typing import Any, NamedTuple


# =============================================================================
# Enums
# =============================================================================


class EventStatus(str, Enum):
    """Lifecycle status of a calendar event."""

    NONE = "none"
    CONFIRMED = "confirmed"
    TENTATIVE = "tentative"
    CANCELED = "canceled"


class Availability(str, Enum):
    """How an event shows on the owner's free/busy schedule."""

    FREE = "free"
    BUSY = "busy"
    TENTATIVE = "tentative"
    UNAVAILABLE = "unavailable"
    NOT_APPLICABLE = "notApplicable"


class AttendeeStatus(str, Enum):
    """Attendee response status."""

    ACCEPTED = "accepted"
    DECLINED = "declined"
    TENTATIVE = "tentative"
    PENDING = "pending"
    DELEGATED = "delegated"
    COMPLETED = "completed"
    IN_PROCESS = "inProcess"
    UNKNOWN = "unknown"


class AttendeeRole(str, Enum):
    """Attendee participation role."""

    REQUIRED = "required"
    OPTIONAL = "optional"
    CHAIR = "chair"
    NON_PARTICIPANT = "nonParticipant"
    UNKNOWN = "unknown"


class DurationTier(str, Enum):
    """
    Coarse classification of a free slot by length.

    - DEEP: 120+ minutes
    - FOCUS: 60+ minutes
    - SHORT: 30+ minutes
    - BRIEF: under 30 minutes
    """

    DEEP = "deep"
    FOCUS = "focus"
    SHORT = "short"
    BRIEF = "brief"

    @classmethod
    def for_minutes(cls, minutes: int) -> "DurationTier":
        if minutes >= 120:
            return cls.DEEP
        if minutes >= 60:
            return cls.FOCUS
        if minutes >= 30:
            return cls.SHORT
        return cls.BRIEF


class Frequency(str, Enum):
    """Recurrence frequency."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class Weekday(IntEnum):
    """Day of week, numbered Sunday=1 through Saturday=7."""

    SUNDAY = 1
    MONDAY = 2
    TUESDAY = 3
    WEDNESDAY = 4
    THURSDAY = 5
    FRIDAY = 6
    SATURDAY = 7

    @property
    def display_name(self) -> str:
        """Full English day name."""
        return self.name.capitalize()

    @classmethod
    def from_date(cls, day: date) -> "Weekday":
        return cls(day.isoweekday() % 7 + 1)


MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

WEEKDAYS = frozenset(
    {Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY, Weekday.FRIDAY}
)


def _coerce(enum_cls, value, default):
    """Map a raw value onto ``enum_cls``, falling back to ``default``."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return default


def _iso(value: datetime | date | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse_datetime(value: Any) -> Any:
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    return value


# =============================================================================
# Event inputs
# =============================================================================


@dataclass(frozen=True)
class CalendarInfo:
    """
    The calendar an event belongs to.
    """

    id: str
    title: str
    color: str = ""
    type: str = ""  # local, calDAV, exchange, subscription, birthday
    source: str = ""  # iCloud, Google, On My Mac, ...

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "color": self.color,
            "type": self.type,
            "source": self.source,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CalendarInfo":
        return cls(**data)


@dataclass(frozen=True)
class Attendee:
    """
    Calendar event attendee.
    """

    name: str | None = None
    email: str | None = None
    status: AttendeeStatus = AttendeeStatus.UNKNOWN
    role: AttendeeRole = AttendeeRole.UNKNOWN
    is_current_user: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "status": self.status.value,
            "role": self.role.value,
            "is_current_user": self.is_current_user,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Attendee":
        data = data.copy()
        data["status"] = _coerce(AttendeeStatus, data.get("status"), AttendeeStatus.UNKNOWN)
        data["role"] = _coerce(AttendeeRole, data.get("role"), AttendeeRole.UNKNOWN)
        return cls(**data)


@dataclass(frozen=True)
class Organizer:
    name: str | None = None
    email: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "email": self.email}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Organizer":
        return cls(**data)


@dataclass(frozen=True)
class RecurrenceInfo:
    """Whether an event repeats, plus an optional precomputed phrase."""

    is_recurring: bool = False
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"is_recurring": self.is_recurring, "description": self.description}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RecurrenceInfo":
        return cls(**data)


@dataclass(frozen=True)
class CalendarEvent:
    """
    Calendar event as resolved by an event source.

    For all-day events ``end`` is exclusive: midnight of the day after the
    last day the event covers. ``start <= end`` is expected but not
    enforced; analysis services treat inverted events as zero-width.
    """

    id: str
    title: str
    start: datetime
    end: datetime
    all_day: bool = False

    location: str | None = None
    notes: str | None = None
    url: str | None = None
    meeting_url: str | None = None

    calendar: CalendarInfo = field(default_factory=lambda: CalendarInfo(id="", title=""))
    attendees: list[Attendee] = field(default_factory=list)
    organizer: Organizer | None = None
    recurrence: RecurrenceInfo = field(default_factory=RecurrenceInfo)

    status: EventStatus = EventStatus.NONE
    availability: Availability = Availability.BUSY
    timezone: str | None = None

    @property
    def current_user_attendee(self) -> Attendee | None:
        """The attendee entry flagged as the current user, if any."""
        for attendee in self.attendees:
            if attendee.is_current_user:
                return attendee
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "id": self.id,
            "title": self.title,
            "start": _iso(self.start),
            "end": _iso(self.end),
            "all_day": self.all_day,
            "location": self.location,
            "notes": self.notes,
            "url": self.url,
            "meeting_url": self.meeting_url,
            "calendar": self.calendar.to_dict(),
            "attendees": [a.to_dict() for a in self.attendees],
            "organizer": self.organizer.to_dict() if self.organizer else None,
            "recurrence": self.recurrence.to_dict(),
            "status": self.status.value,
            "availability": self.availability.value,
            "timezone": self.timezone,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CalendarEvent":
        """Create from dict."""
        data = data.copy()
        for time_field in ["start", "end"]:
            data[time_field] = _parse_datetime(data.get(time_field))
            if not isinstance(data[time_field], datetime):
                raise ValueError(f"{time_field} must be an ISO 8601 timestamp")
        if isinstance(data.get("calendar"), dict):
            data["calendar"] = CalendarInfo.from_dict(data["calendar"])
        if data.get("attendees"):
            data["attendees"] = [
                Attendee.from_dict(a) if isinstance(a, dict) else a
                for a in data["attendees"]
            ]
        if isinstance(data.get("organizer"), dict):
            data["organizer"] = Organizer.from_dict(data["organizer"])
        if isinstance(data.get("recurrence"), dict):
            data["recurrence"] = RecurrenceInfo.from_dict(data["recurrence"])
        if "status" in data:
            data["status"] = _coerce(EventStatus, data["status"], EventStatus.NONE)
        if "availability" in data:
            data["availability"] = _coerce(
                Availability, data["availability"], Availability.NOT_APPLICABLE
            )
        return cls(**data)

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), default=str)


# =============================================================================
# Recurrence rule input
# =============================================================================


class RecurrenceDay(NamedTuple):
    """A day-of-week qualifier; ``week_number`` 0 means every week, -1 the last."""

    day_of_week: int
    week_number: int = 0


@dataclass(frozen=True)
class RecurrenceRuleComponents:
    """
    Structured recurrence rule.

    ``frequency`` is normally a Frequency member; any other value is
    described as a generic repeat. ``interval`` must be positive.
    """

    frequency: Frequency | str
    interval: int = 1
    days_of_week: list[RecurrenceDay] | None = None
    days_of_month: list[int] | None = None
    months_of_year: list[int] | None = None


# =============================================================================
# Working hours
# =============================================================================


def _parse_clock(value: str) -> tuple[int, int] | None:
    parts = value.strip().split(":")
    if len(parts) != 2:
        return None
    try:
        hour, minute = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None
    return hour, minute


@dataclass(frozen=True)
class WorkingHours:
    """
    Daily working window in local wall-clock time, same for every day.

    A window whose start is not before its end yields no free time.
    """

    start_hour: int = 9
    start_minute: int = 0
    end_hour: int = 17
    end_minute: int = 0

    @classmethod
    def parse(cls, start: str, end: str) -> "WorkingHours | None":
        """Build from two ``HH:MM`` strings, or None if either is invalid."""
        start_parts = _parse_clock(start)
        end_parts = _parse_clock(end)
        if start_parts is None or end_parts is None:
            return None
        return cls(
            start_hour=start_parts[0],
            start_minute=start_parts[1],
            end_hour=end_parts[0],
            end_minute=end_parts[1],
        )

    @property
    def start_label(self) -> str:
        return f"{self.start_hour:02d}:{self.start_minute:02d}"

    @property
    def end_label(self) -> str:
        return f"{self.end_hour:02d}:{self.end_minute:02d}"

    def __str__(self) -> str:
        return f"{self.start_label}-{self.end_label}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_hour": self.start_hour,
            "start_minute": self.start_minute,
            "end_hour": self.end_hour,
            "end_minute": self.end_minute,
        }


DEFAULT_WORKING_HOURS = WorkingHours()


# =============================================================================
# Results
# =============================================================================


@dataclass(frozen=True)
class DateRange:
    from_: datetime
    to: datetime

    def to_dict(self) -> dict[str, Any]:
        return {"from": _iso(self.from_), "to": _iso(self.to)}


@dataclass(frozen=True)
class ConflictGroup:
    """
    Two or more events whose time ranges overlap, directly or through a
    chain of overlaps.
    """

    events: list[CalendarEvent]
    window_start: datetime
    window_end: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "events": [e.to_dict() for e in self.events],
            "window_start": _iso(self.window_start),
            "window_end": _iso(self.window_end),
        }


@dataclass(frozen=True)
class ConflictResult:
    groups: list[ConflictGroup]
    total_conflicts: int
    date_range: DateRange

    def to_dict(self) -> dict[str, Any]:
        return {
            "groups": [g.to_dict() for g in self.groups],
            "total_conflicts": self.total_conflicts,
            "date_range": self.date_range.to_dict(),
        }


@dataclass(frozen=True)
class FreeSlot:
    start: datetime
    end: datetime
    duration_minutes: int
    tier: DurationTier

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": _iso(self.start),
            "end": _iso(self.end),
            "duration_minutes": self.duration_minutes,
            "tier": self.tier.value,
        }


@dataclass(frozen=True)
class DayFreeSlots:
    date: date
    date_label: str
    slots: list[FreeSlot]
    total_free_minutes: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": _iso(self.date),
            "date_label": self.date_label,
            "slots": [s.to_dict() for s in self.slots],
            "total_free_minutes": self.total_free_minutes,
        }


@dataclass(frozen=True)
class FreeTimeResult:
    days: list[DayFreeSlots]
    total_free_minutes: int
    working_hours: WorkingHours
    min_duration_minutes: int
    date_range: DateRange

    def to_dict(self) -> dict[str, Any]:
        return {
            "days": [d.to_dict() for d in self.days],
            "total_free_minutes": self.total_free_minutes,
            "working_hours": self.working_hours.to_dict(),
            "min_duration_minutes": self.min_duration_minutes,
            "date_range": self.date_range.to_dict(),
        }


@dataclass(frozen=True)
class DateGroup:
    """Events assigned to one calendar day, keyed ``YYYY-MM-DD``."""

    date: str
    events: list[CalendarEvent]

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date, "events": [e.to_dict() for e in self.events]}


@dataclass(frozen=True)
class CalendarGroup:
    calendar: CalendarInfo
    events: list[CalendarEvent]

    def to_dict(self) -> dict[str, Any]:
        return {
            "calendar": self.calendar.to_dict(),
            "events": [e.to_dict() for e in self.events],
        }


@dataclass(frozen=True)
class WeekInfo:
    """Week number with its Sunday..Saturday bounds."""

    week: int
    year: int
    start_date: date
    end_date: date

    def to_dict(self) -> dict[str, Any]:
        return {
            "week": self.week,
            "year": self.year,
            "start_date": _iso(self.start_date),
            "end_date": _iso(self.end_date),
        }
