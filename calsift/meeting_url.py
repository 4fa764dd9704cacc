"""
Meeting link detection for Google Meet, Zoom, Microsoft Teams and Webex.

Event sources call this to fill ``CalendarEvent.meeting_url`` when the
provider does not expose a conference link directly.
"""

import re
from dataclasses import dataclass
from enum import Enum


class MeetingVendor(str, Enum):
    MEET = "meet"
    ZOOM = "zoom"
    TEAMS = "teams"
    WEBEX = "webex"


@dataclass(frozen=True)
class MeetingURLMatch:
    url: str
    vendor: MeetingVendor


# Checked in order; first vendor whose pattern matches wins
VENDOR_PATTERNS: list[tuple[MeetingVendor, re.Pattern]] = [
    (MeetingVendor.MEET, re.compile(r"https?://meet\.google\.com/[a-z]{3}-[a-z]{4}-[a-z]{3}\S*")),
    (MeetingVendor.ZOOM, re.compile(r"https?://(?:[a-z0-9]+\.)?zoom\.us/j/[0-9]+\S*")),
    (MeetingVendor.TEAMS, re.compile(r"https?://teams\.microsoft\.com/l/meetup-join/\S+")),
    (MeetingVendor.WEBEX, re.compile(r"https?://[a-z0-9]+\.webex\.com/\S*(?:meet|join)\S*")),
]


def find_meeting_url(text: str) -> MeetingURLMatch | None:
    for vendor, pattern in VENDOR_PATTERNS:
        match = pattern.search(text)
        if match:
            return MeetingURLMatch(url=match.group(0), vendor=vendor)
    return None


def extract_meeting_url_match(
    url: str | None = None,
    location: str | None = None,
    notes: str | None = None,
) -> MeetingURLMatch | None:
    """Search the event's URL, then location, then notes."""
    for text in (url, location, notes):
        if text:
            match = find_meeting_url(text)
            if match:
                return match
    return None


def extract_meeting_url(
    url: str | None = None,
    location: str | None = None,
    notes: str | None = None,
) -> str | None:
    match = extract_meeting_url_match(url=url, location=location, notes=notes)
    return match.url if match else None
