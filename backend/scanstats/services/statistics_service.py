"""
Statistics Service - Run catalog pipelines against the analysis collection.

Provides:
- Named statistic lookup, optionally restricted to a time range
- A single pass-through seam for executing any stage sequence
"""

import logging
from typing import Any, Dict, List, Optional, Union

from pymongo.database import Database

from scanstats.entities.enums import StatisticName, TimeRange
from scanstats.pipeline.catalog import STATISTICS_CATALOG, pipeline_for
from scanstats.pipeline.generators import time_filter_stages
from scanstats.pipeline.stages import Pipeline, to_mongo_pipeline
from scanstats.repositories.analysis import AnalysisRepository
from scanstats.services.exceptions import InvalidTimeRangeError

logger = logging.getLogger(__name__)


class StatisticsService:
    """Service for computing analysis statistics."""

    def __init__(self, db: Database):
        self.db = db
        self.analysis_repo = AnalysisRepository(db)

    def compute_statistic(
        self, pipeline: Pipeline, collection_name: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        Forward an assembled pipeline to MongoDB and return its rows.

        No validation, retries or reshaping happen here; driver errors
        (``PyMongoError``) reach the caller unchanged.

        Args:
            pipeline: Stages to run, already merged with any time filter
            collection_name: Target collection (defaults to the analysis collection)
        """
        repo = self.analysis_repo
        if collection_name and collection_name != repo.collection_name:
            repo = AnalysisRepository(self.db, collection_name)

        logger.debug(
            "Running %d-stage aggregation on %s", len(pipeline), repo.collection_name
        )
        return repo.aggregate(to_mongo_pipeline(pipeline))

    def build_pipeline(
        self,
        name: Union[StatisticName, str],
        time_range: Union[TimeRange, str, None] = None,
    ) -> Pipeline:
        """
        Assemble the pipeline for a named statistic.

        When a time range is given, its filter stage is generated now and
        prepended so it runs before any unwind/group.

        Raises:
            UnknownStatisticError: If the statistic is not in the catalog
            InvalidTimeRangeError: If the time range is not a known preset
        """
        pipeline = pipeline_for(name)
        if time_range is None:
            return pipeline

        init_days, end_days = self._resolve_time_range(time_range).day_offsets
        return time_filter_stages(init_days, end_days) + pipeline

    def get_metric(
        self,
        name: Union[StatisticName, str],
        time_range: Union[TimeRange, str, None] = None,
    ) -> List[Dict[str, Any]]:
        """Compute a named statistic, optionally scoped to a time range."""
        pipeline = self.build_pipeline(name, time_range)
        logger.info("Computing statistic %s (time_range=%s)", name, time_range)
        return self.compute_statistic(pipeline)

    @staticmethod
    def list_metrics() -> List[str]:
        """Names of every statistic in the catalog."""
        return [name.value for name in STATISTICS_CATALOG]

    @staticmethod
    def _resolve_time_range(time_range: Union[TimeRange, str]) -> TimeRange:
        try:
            return TimeRange(time_range)
        except ValueError:
            raise InvalidTimeRangeError(str(time_range)) from None
