"""Data Transfer Objects (DTOs) for API requests and responses"""

from .statistics import MetricListResponse, StatisticResponse

__all__ = [
    "MetricListResponse",
    "StatisticResponse",
]
