"""
MongoDB Database - Infrastructure Layer

Thin async facade over a synchronous pymongo client. Every call runs in a
worker thread so the event loop is never blocked by the driver.
"""

import asyncio
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pymongo.errors
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
import structlog

logger = structlog.get_logger(__name__)

SortSpec = Sequence[Tuple[str, int]]


class MongoDatabase:
    """MongoDB database client."""

    def __init__(self, mongo_uri: str, db_name: str):
        """
        Initialize the MongoDB database client.

        Args:
            mongo_uri: MongoDB connection URI
            db_name: Name of the database to use
        """
        self.client: MongoClient = MongoClient(mongo_uri)
        self.db: Database = self.client[db_name]

    def get_collection(self, collection_name: str) -> Collection:
        return self.db[collection_name]

    async def find_one(
        self,
        collection_name: str,
        query: Dict[str, Any],
        sort: Optional[SortSpec] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Find a single document in a collection.

        Args:
            collection_name: Name of the collection
            query: Query to match documents
            sort: Optional (field, direction) pairs deciding which match wins

        Returns:
            The document if found, None otherwise
        """

        def _find() -> Optional[Dict[str, Any]]:
            cursor = self.db[collection_name].find(query)
            if sort:
                cursor = cursor.sort(list(sort))
            for document in cursor.limit(1):
                return document
            return None

        return await asyncio.to_thread(_find)

    async def find_many(
        self,
        collection_name: str,
        query: Dict[str, Any],
        sort_by: Optional[str] = None,
        sort_direction: int = 1,
        projection: Optional[Dict[str, Any]] = None,
        limit: int = 0,
    ) -> List[Dict[str, Any]]:
        """
        Find multiple documents in a collection.

        Args:
            collection_name: Name of the collection
            query: Query to match documents
            sort_by: Field to sort by
            sort_direction: Sort direction (1 for ascending, -1 for descending)
            projection: Fields to return
            limit: Maximum number of documents to return, 0 for all

        Returns:
            List of documents
        """

        def _find() -> List[Dict[str, Any]]:
            if projection is None:
                cursor = self.db[collection_name].find(query)
            else:
                cursor = self.db[collection_name].find(query, projection)
            if sort_by:
                cursor = cursor.sort(sort_by, sort_direction)
            if limit:
                cursor = cursor.limit(limit)
            return list(cursor)

        return await asyncio.to_thread(_find)

    async def aggregate(
        self, collection_name: str, pipeline: List[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        """Run an aggregation pipeline and return every resulting document."""
        return await asyncio.to_thread(
            lambda: list(self.db[collection_name].aggregate(pipeline))
        )

    async def ping(self) -> None:
        await asyncio.to_thread(self.client.admin.command, "ping")

    def close(self) -> None:
        """Close the database connection."""
        self.client.close()

    async def create_indexes(self, readings_collection: str) -> None:
        """
        Create the indexes used by the readings queries.
        Called once during application startup.
        """
        collection = self.db[readings_collection]
        try:
            await asyncio.to_thread(
                collection.create_index, "timestamp", name="timestamp_idx"
            )
            await asyncio.to_thread(
                collection.create_index,
                [("meter_id", 1), ("timestamp", 1)],
                name="meter_timestamp_idx",
                background=True,
            )
        except pymongo.errors.OperationFailure as e:
            logger.warning(
                "mongo.create_indexes_failed",
                collection=readings_collection,
                error=str(e),
            )
