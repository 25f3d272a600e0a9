from __future__ import annotations

import sys
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

import pytest

from runrate.domain.entities.consumption import (
    AvailablePeriod,
    DailyTotal,
    MeterReading,
)
from runrate.domain.entities.errors import ReadingsSourceError
from runrate.domain.repositories.readings_repository import IReadingsRepository

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def daily_series(
    year: int, month: int, days: Sequence[int], kwh: float = 10.0
) -> List[DailyTotal]:
    return [
        DailyTotal(date=date(year, month, day), energy_kwh=kwh, hours_count=24)
        for day in days
    ]


def hourly_readings(
    meter_id: str,
    day: date,
    hours: Sequence[int],
    kwh: float = 1.0,
    per_hour: int = 1,
) -> List[MeterReading]:
    readings: List[MeterReading] = []
    for hour in hours:
        for index in range(per_hour):
            readings.append(
                MeterReading(
                    meter_id=meter_id,
                    timestamp=datetime(day.year, day.month, day.day, hour, index * 5),
                    energy_consumed_kwh=kwh,
                )
            )
    return readings


def month_readings(
    meter_id: str,
    year: int,
    month: int,
    days: Sequence[int],
    kwh_per_hour: float = 1.0,
) -> List[MeterReading]:
    readings: List[MeterReading] = []
    for day in days:
        readings.extend(
            hourly_readings(meter_id, date(year, month, day), range(24), kwh_per_hour)
        )
    return readings


class StubReadingsRepository(IReadingsRepository):
    """In-memory readings source that records every call."""

    def __init__(
        self,
        readings: Sequence[MeterReading] = (),
        fail_with: Optional[Exception] = None,
    ) -> None:
        self.readings = list(readings)
        self.fail_with = fail_with
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    async def find_month(
        self, year: int, month: int, meter_id: Optional[str] = None
    ) -> List[MeterReading]:
        self.calls.append(("find_month", (year, month, meter_id)))
        if self.fail_with is not None:
            raise self.fail_with
        return sorted(
            (
                reading
                for reading in self.readings
                if reading.timestamp.year == year
                and reading.timestamp.month == month
                and (meter_id is None or reading.meter_id == meter_id)
            ),
            key=lambda reading: reading.timestamp,
        )

    async def find_latest_period(self) -> Optional[Tuple[int, int]]:
        self.calls.append(("find_latest_period", ()))
        if self.fail_with is not None:
            raise self.fail_with
        if not self.readings:
            return None
        latest = max(reading.timestamp for reading in self.readings)
        return latest.year, latest.month

    async def find_available_periods(self) -> List[AvailablePeriod]:
        self.calls.append(("find_available_periods", ()))
        if self.fail_with is not None:
            raise self.fail_with
        counts: Dict[Tuple[int, int], int] = {}
        for reading in self.readings:
            key = (reading.timestamp.year, reading.timestamp.month)
            counts[key] = counts.get(key, 0) + 1
        return [
            AvailablePeriod(year=year, month=month, records=records)
            for (year, month), records in sorted(counts.items(), reverse=True)
        ]

    @property
    def load_count(self) -> int:
        return sum(1 for name, _ in self.calls if name == "find_month")


class FakeCursor:
    def __init__(self, documents: Sequence[Dict[str, Any]]):
        self._documents = list(documents)
        self._limit: Optional[int] = None

    def sort(self, key: Any, direction: int = 1) -> "FakeCursor":
        keys = key if isinstance(key, list) else [(key, direction)]
        for field, field_direction in reversed(keys):
            self._documents.sort(
                key=lambda doc: doc.get(field), reverse=field_direction < 0
            )
        return self

    def limit(self, amount: int) -> "FakeCursor":
        self._limit = amount
        return self

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        docs = self._documents
        if self._limit:
            docs = docs[: self._limit]
        return iter(docs)


class FakeCollection:
    def __init__(self, documents: Sequence[Dict[str, Any]] = ()) -> None:
        self.documents: List[Dict[str, Any]] = list(documents)
        self.last_query: Optional[Dict[str, Any]] = None
        self.last_pipeline: Optional[List[Dict[str, Any]]] = None
        self.created_indexes: List[Tuple[Any, ...]] = []

    def find(
        self, query: Dict[str, Any], projection: Optional[Dict[str, Any]] = None
    ) -> FakeCursor:
        self.last_query = query
        return FakeCursor([doc for doc in self.documents if self._matches(doc, query)])

    def aggregate(self, pipeline: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        self.last_pipeline = pipeline
        counts: Dict[Tuple[int, int], int] = {}
        for doc in self.documents:
            key = (doc["timestamp"].year, doc["timestamp"].month)
            counts[key] = counts.get(key, 0) + 1
        return [
            {"_id": {"year": year, "month": month}, "records": records}
            for (year, month), records in sorted(counts.items(), reverse=True)
        ]

    def create_index(self, keys: Any, name: Optional[str] = None, **kwargs: Any) -> Any:
        self.created_indexes.append((keys, name, kwargs))
        return name or keys

    @staticmethod
    def _matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
        for key, condition in query.items():
            value = document.get(key)
            if isinstance(condition, dict):
                if "$gte" in condition and not value >= condition["$gte"]:
                    return False
                if "$lt" in condition and not value < condition["$lt"]:
                    return False
            elif value != condition:
                return False
        return True


class FakeMongoDatabase:
    """Async facade with the same surface as MongoDatabase."""

    def __init__(self, fail_with: Optional[Exception] = None) -> None:
        self.collections: Dict[str, FakeCollection] = {}
        self.fail_with = fail_with
        self.closed = False

    def get_collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    async def find_one(
        self,
        collection_name: str,
        query: Dict[str, Any],
        sort: Optional[Sequence[Tuple[str, int]]] = None,
    ) -> Optional[Dict[str, Any]]:
        self._check()
        cursor = self.get_collection(collection_name).find(query)
        if sort:
            cursor = cursor.sort(list(sort))
        return next(iter(cursor.limit(1)), None)

    async def find_many(
        self,
        collection_name: str,
        query: Dict[str, Any],
        sort_by: Optional[str] = None,
        sort_direction: int = 1,
        projection: Optional[Dict[str, Any]] = None,
        limit: int = 0,
    ) -> List[Dict[str, Any]]:
        self._check()
        cursor = self.get_collection(collection_name).find(query, projection)
        if sort_by:
            cursor = cursor.sort(sort_by, sort_direction)
        if limit:
            cursor = cursor.limit(limit)
        return list(cursor)

    async def aggregate(
        self, collection_name: str, pipeline: List[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        self._check()
        return self.get_collection(collection_name).aggregate(pipeline)

    async def ping(self) -> None:
        self._check()

    async def create_indexes(self, readings_collection: str) -> None:
        pass

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def fake_mongo_database() -> FakeMongoDatabase:
    return FakeMongoDatabase()


@pytest.fixture()
def failing_source_error() -> ReadingsSourceError:
    return ReadingsSourceError("connection refused")


@pytest.fixture()
def fixed_now() -> datetime:
    return datetime(2025, 3, 20, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def fixed_clock(fixed_now: datetime):
    return lambda: fixed_now
