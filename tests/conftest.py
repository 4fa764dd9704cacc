"""Shared test fixtures for Calsift tests.

This module provides common fixtures used across all test modules:
- A fixed timezone with DST transitions
- Calendar and event factories
- Events JSON files on disk

Usage:
    def test_something(make_event, tz):
        event = make_event("Standup", datetime(2024, 3, 15, 9, 0, tzinfo=tz), minutes=15)
        ...
"""

import itertools
import json
from collections.abc import Callable
from datetime import datetime, timedelta
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from calsift.models import CalendarEvent, CalendarInfo


# ─────────────────────────────────────────────────────────────────────────────
# Path Constants
# ─────────────────────────────────────────────────────────────────────────────

PROJECT_ROOT = Path(__file__).parent.parent
PACKAGE_DIR = PROJECT_ROOT / "calsift"


# ─────────────────────────────────────────────────────────────────────────────
# Timezone Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def tz() -> ZoneInfo:
    """Timezone used by the day-oriented tests (observes DST)."""
    return ZoneInfo("America/New_York")


# ─────────────────────────────────────────────────────────────────────────────
# Calendar Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def work_calendar() -> CalendarInfo:
    return CalendarInfo(id="cal-work", title="Work", color="#1BADF8", type="exchange", source="Exchange")


@pytest.fixture
def home_calendar() -> CalendarInfo:
    return CalendarInfo(id="cal-home", title="home", color="#63DA38", type="calDAV", source="iCloud")


# ─────────────────────────────────────────────────────────────────────────────
# Event Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def make_event(work_calendar: CalendarInfo) -> Callable[..., CalendarEvent]:
    """Factory for calendar events.

    Either ``end`` or ``minutes`` sets the end; the default is one hour.
    Other keyword arguments are passed to CalendarEvent.

    Returns:
        Callable building CalendarEvent instances with unique ids
    """
    counter = itertools.count(1)

    def _make(
        title: str,
        start: datetime,
        end: datetime | None = None,
        minutes: int = 60,
        **kwargs,
    ) -> CalendarEvent:
        kwargs.setdefault("calendar", work_calendar)
        event_id = kwargs.pop("id", None) or f"evt-{next(counter)}"
        return CalendarEvent(
            id=event_id,
            title=title,
            start=start,
            end=end if end is not None else start + timedelta(minutes=minutes),
            **kwargs,
        )

    return _make


@pytest.fixture
def write_events(tmp_path: Path) -> Callable[[list], Path]:
    """Write raw event dicts (or any JSON payload) to a temporary events file.

    Returns:
        Callable returning the path of the written file
    """

    def _write(payload, name: str = "events.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload, default=str), encoding="utf-8")
        return path

    return _write
