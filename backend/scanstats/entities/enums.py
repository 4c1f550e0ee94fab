"""
Shared enums for statistics.

This module contains enums that are used across the pipeline catalog,
the service layer and the API.
"""

from enum import Enum
from typing import Tuple


class StatisticName(str, Enum):
    """Statistics exposed by the catalog."""

    LANGUAGE = "language"
    CONTAINER = "container"
    ANALYSIS = "analysis"
    REPOSITORY = "repository"
    AUTHOR = "author"
    SEVERITY = "severity"
    TIME_TO_FIX = "time-to-fix"


class StageOperator(str, Enum):
    """Aggregation stage kinds used by the catalog."""

    PROJECT = "$project"
    UNWIND = "$unwind"
    GROUP = "$group"
    MATCH = "$match"


class AnalysisResult(str, Enum):
    """Final outcome stored in an analysis record."""

    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"


class TimeRange(str, Enum):
    """Named time windows accepted by the stats endpoint."""

    TODAY = "today"
    YESTERDAY = "yesterday"
    LAST_7_DAYS = "last7days"
    LAST_15_DAYS = "last15days"
    LAST_30_DAYS = "last30days"

    @property
    def day_offsets(self) -> Tuple[int, int]:
        """(init_days, end_days) relative to today."""
        return _TIME_RANGE_OFFSETS[self]


_TIME_RANGE_OFFSETS = {
    TimeRange.TODAY: (0, 0),
    TimeRange.YESTERDAY: (-1, -1),
    TimeRange.LAST_7_DAYS: (-6, 0),
    TimeRange.LAST_15_DAYS: (-14, 0),
    TimeRange.LAST_30_DAYS: (-29, 0),
}
