"""Calsift Test Suite

This package contains all tests for the Calsift scheduling analysis tools.

Test organization:
- unit/: Unit tests for individual modules
  - scheduling/: Scheduling filter, conflict detection, free time
  - grouping/: Day buckets, calendar groups, week numbers
  - top level: models, recurrence, events, config, CLI

Running tests:
    # All tests
    pytest

    # Specific area
    pytest tests/unit/scheduling/
"""
