"""Calsift: Scheduling analysis over calendar events

Answers two questions about a set of calendar events in a time window:
"when do my commitments overlap?" and "when am I free?". Also buckets
events into calendar days and describes recurrence rules in plain English.

Components:
    models.py: Event, attendee, calendar and result data structures
    scheduling/: Scheduling filter, conflict detection, free time
    grouping/: Day buckets, calendar groups, week numbers
    recurrence.py: Human-readable recurrence phrases
    events.py: Event selection and loading (event source side)
    meeting_url.py: Meeting link detection
    date_parser.py: Date arguments such as "today+3" or ISO 8601
    timeutil.py: Timezone-aware day arithmetic
    config_models.py: YAML configuration (args/calsift.yaml)
    cli.py: Command line entry point

The analysis functions are pure: they never mutate their inputs, keep no
shared state, and return fresh results on every call.
"""

from pathlib import Path


# Path constants
PROJECT_ROOT = Path(__file__).parent.parent
PACKAGE_ROOT = Path(__file__).parent
ARGS_DIR = PROJECT_ROOT / "args"
CONFIG_PATH = ARGS_DIR / "calsift.yaml"

__version__ = "0.3.0"

__all__ = [
    "ARGS_DIR",
    "CONFIG_PATH",
    "PACKAGE_ROOT",
    "PROJECT_ROOT",
    "__version__",
]
