from __future__ import annotations

"""Base repository pattern for MongoDB operations"""

from abc import ABC
from typing import Any, Dict, List

from pymongo.collection import Collection
from pymongo.database import Database


class BaseRepository(ABC):
    """Base repository providing read access to a MongoDB collection"""

    def __init__(self, db: Database, collection_name: str):
        self.db = db
        self.collection_name = collection_name
        self.collection: Collection = db[collection_name]


    def aggregate(self, pipeline: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Execute an aggregation pipeline"""
        return list(self.collection.aggregate(pipeline))
