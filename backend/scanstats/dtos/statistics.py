"""
Statistics DTOs - Data transfer objects for statistics endpoints.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from scanstats.entities.enums import StatisticName, TimeRange


class StatisticResponse(BaseModel):
    """Rows produced by one catalog pipeline."""

    metric: StatisticName
    time_range: Optional[TimeRange] = None
    # Row shape is defined by each metric's final stage
    results: List[Dict[str, Any]] = Field(default_factory=list)


class MetricListResponse(BaseModel):
    """Statistics available from the catalog."""

    metrics: List[str] = Field(default_factory=list)
