"""Custom exceptions for statistics computation."""

from __future__ import annotations


class StatisticsError(Exception):
    """Base exception for statistics failures."""


class UnknownStatisticError(StatisticsError):
    """Raised when a statistic name is not in the catalog."""

    def __init__(self, name: str):
        super().__init__(f"Unknown statistic: {name}")
        self.name = name


class InvalidTimeRangeError(StatisticsError):
    """Raised when a time_range value has no known day offsets."""

    def __init__(self, time_range: str):
        super().__init__(f"Invalid time range: {time_range}")
        self.time_range = time_range
