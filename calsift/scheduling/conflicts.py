"""
Tool: Conflict Detector
Purpose: Find groups of calendar events that overlap in time

Walks events in start order and grows a cluster while each next event
starts strictly before the furthest end seen so far. Back-to-back events
(one ends exactly when the next starts) are not conflicts.

Usage:
    from calsift.scheduling.conflicts import find_conflicts

    result = find_conflicts(events, from_=day_start, to=day_end)
    for group in result.groups:
        print(group.window_start, [e.title for e in group.events])
"""

from collections.abc import Sequence
from datetime import datetime

from calsift.logging_config import get_logger
from calsift.models import CalendarEvent, ConflictGroup, ConflictResult, DateRange
from calsift.scheduling.filter import filter_for_scheduling
from calsift.timeutil import instant


logger = get_logger(__name__)


def _close_cluster(
    cluster: list[CalendarEvent],
    cluster_end: datetime,
    groups: list[ConflictGroup],
) -> None:
    if len(cluster) >= 2:
        groups.append(
            ConflictGroup(
                events=list(cluster),
                window_start=cluster[0].start,
                window_end=cluster_end,
            )
        )


def detect_conflicts(events: Sequence[CalendarEvent]) -> list[ConflictGroup]:
    """
    Cluster overlapping events with a sweep line.

    Args:
        events: Events already sorted ascending by start and already
            passed through the scheduling filter

    Returns:
        Conflict groups in chronological order; each holds 2+ events and
        no event appears in more than one group
    """
    if len(events) < 2:
        return []

    groups: list[ConflictGroup] = []
    cluster = [events[0]]
    cluster_end = events[0].end

    for event in events[1:]:
        if instant(event.start) < instant(cluster_end):
            cluster.append(event)
            cluster_end = max(cluster_end, event.end, key=instant)
        else:
            _close_cluster(cluster, cluster_end, groups)
            cluster = [event]
            cluster_end = event.end

    _close_cluster(cluster, cluster_end, groups)
    return groups


def find_conflicts(
    events: Sequence[CalendarEvent],
    from_: datetime,
    to: datetime,
) -> ConflictResult:
    """
    Filter, order and cluster events into a full conflict report.

    Args:
        events: Events in the queried range, in any order
        from_: Start of the queried range (recorded on the result)
        to: End of the queried range (recorded on the result)

    Returns:
        ConflictResult with one entry per conflict group
    """
    busy = filter_for_scheduling(events)
    # sorted() is stable, so equal starts keep their input order
    busy = sorted(busy, key=lambda e: instant(e.start))
    groups = detect_conflicts(busy)

    logger.debug(
        "conflicts_detected",
        events_in=len(events),
        events_busy=len(busy),
        groups=len(groups),
    )

    return ConflictResult(
        groups=groups,
        total_conflicts=len(groups),
        date_range=DateRange(from_=from_, to=to),
    )
