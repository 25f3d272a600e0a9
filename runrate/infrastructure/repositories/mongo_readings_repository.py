"""
MongoDB Readings Repository - Infrastructure Layer

Reads raw meter readings stored one document per reading:
``{"meter_id": str, "timestamp": datetime, "energy_consumed_kwh": float}``.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import pymongo.errors
import structlog

from runrate.domain.entities.consumption import AvailablePeriod, MeterReading
from runrate.domain.entities.errors import ReadingsSourceError
from runrate.domain.repositories.readings_repository import IReadingsRepository
from runrate.domain.services.period_calendar import days_in_month, next_period
from runrate.infrastructure.database import MongoDatabase
from runrate.infrastructure.repositories.readings_mapper import to_reading

logger = structlog.get_logger(__name__)


class MongoReadingsRepository(IReadingsRepository):
    """MongoDB implementation of the readings repository."""

    def __init__(
        self, mongo_database: MongoDatabase, collection_name: str = "readings"
    ):
        self.db = mongo_database
        self.collection_name = collection_name

    async def find_month(
        self, year: int, month: int, meter_id: Optional[str] = None
    ) -> List[MeterReading]:
        days_in_month(year, month)
        end_year, end_month = next_period(year, month)
        query: Dict[str, Any] = {
            "timestamp": {
                "$gte": datetime(year, month, 1),
                "$lt": datetime(end_year, end_month, 1),
            }
        }
        if meter_id is not None:
            query["meter_id"] = meter_id

        try:
            documents = await self.db.find_many(
                self.collection_name,
                query,
                sort_by="timestamp",
                sort_direction=1,
                projection={"_id": 0},
            )
        except pymongo.errors.PyMongoError as e:
            logger.error(
                "readings.mongo.query_failed",
                period=f"{year}-{month:02d}",
                meter_id=meter_id,
                error=str(e),
            )
            raise ReadingsSourceError(
                f"Failed to load readings for {year}-{month:02d}: {e}",
                {"year": year, "month": month},
            ) from e

        readings: List[MeterReading] = []
        for document in documents:
            reading = to_reading(document)
            if reading is not None:
                readings.append(reading)

        skipped = len(documents) - len(readings)
        if skipped:
            logger.warning(
                "readings.mongo.skipped_documents",
                period=f"{year}-{month:02d}",
                skipped=skipped,
            )
        return readings

    async def find_latest_period(self) -> Optional[Tuple[int, int]]:
        try:
            document = await self.db.find_one(
                self.collection_name, {}, sort=[("timestamp", -1)]
            )
        except pymongo.errors.PyMongoError as e:
            raise ReadingsSourceError(
                f"Failed to find the latest reading: {e}"
            ) from e

        if document is None:
            return None
        reading = to_reading(document)
        if reading is None:
            return None
        return reading.timestamp.year, reading.timestamp.month

    async def find_available_periods(self) -> List[AvailablePeriod]:
        pipeline: List[Dict[str, Any]] = [
            {
                "$group": {
                    "_id": {
                        "year": {"$year": "$timestamp"},
                        "month": {"$month": "$timestamp"},
                    },
                    "records": {"$sum": 1},
                }
            },
            {"$sort": {"_id.year": -1, "_id.month": -1}},
        ]
        try:
            rows = await self.db.aggregate(self.collection_name, pipeline)
        except pymongo.errors.PyMongoError as e:
            raise ReadingsSourceError(f"Failed to list available months: {e}") from e

        return [
            AvailablePeriod(
                year=int(row["_id"]["year"]),
                month=int(row["_id"]["month"]),
                records=int(row["records"]),
            )
            for row in rows
        ]
