"""
Statistics API - Endpoints for analysis statistics.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pymongo.database import Database

from scanstats.database.mongo import get_db
from scanstats.dtos.statistics import MetricListResponse, StatisticResponse
from scanstats.services.statistics_service import StatisticsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stats", tags=["Statistics"])


@router.get("", response_model=MetricListResponse)
async def list_metrics():
    """List the statistics that can be requested."""
    return MetricListResponse(metrics=StatisticsService.list_metrics())


@router.get("/{metric_type}", response_model=StatisticResponse)
def get_metric(
    metric_type: str,
    time_range: Optional[str] = Query(
        None,
        description="today, yesterday, last7days, last15days or last30days",
    ),
    db: Database = Depends(get_db),
):
    """
    Compute one statistic over the analysis collection.

    Metrics:
    - language / container: analyses per language or security test
    - analysis: analyses per result
    - repository: total repositories and branches
    - author: total distinct commit authors
    - severity: findings per severity level
    - time-to-fix: passed/failed history for branches that had both
    """
    service = StatisticsService(db)
    results = service.get_metric(metric_type, time_range)
    return StatisticResponse(metric=metric_type, time_range=time_range, results=results)
