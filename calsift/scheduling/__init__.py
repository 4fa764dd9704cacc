"""Scheduling analysis: Conflicts and free time

Components:
    filter.py: Decide which events count as busy time
    conflicts.py: Sweep-line clustering of overlapping events
    free_time.py: Free gaps inside daily working hours

Both conflict detection and free-time search run the scheduling filter
first, so canceled, show-as-free and declined events never block time.
"""

from calsift.scheduling.conflicts import detect_conflicts, find_conflicts
from calsift.scheduling.filter import filter_for_scheduling, is_schedulable
from calsift.scheduling.free_time import find_free_time, find_slots, merge_busy_blocks


__all__ = [
    "detect_conflicts",
    "filter_for_scheduling",
    "find_conflicts",
    "find_free_time",
    "find_slots",
    "is_schedulable",
    "merge_busy_blocks",
]
