"""
Analysis Repository.
"""

from typing import Optional

from pymongo.database import Database

from scanstats.config import settings
from scanstats.repositories.base import BaseRepository


class AnalysisRepository(BaseRepository):
    """Repository for security-scan analysis records."""

    def __init__(self, db: Database, collection_name: Optional[str] = None):
        super().__init__(db, collection_name or settings.ANALYSIS_COLLECTION)
