"""Infrastructure implementation for system health checks."""

from __future__ import annotations

from pathlib import Path
from time import perf_counter
from typing import Any, Mapping, Optional

from runrate.domain.entities.health import (
    CacheUsage,
    ReadingsSourceHealth,
    ServiceStatus,
    SystemHealth,
)
from runrate.domain.ports.health_check import IHealthCheckService
from runrate.infrastructure.database.mongo_database import MongoDatabase
from runrate.infrastructure.repositories.csv_readings_repository import FILE_PATTERN
from runrate.shared.consts import EnumDataBackend
from runrate.shared.ttl_cache import TTLCache


class HealthCheckService(IHealthCheckService):
    """
    Probe the configured readings source and report cache usage.

    MongoDB is pinged. A CSV directory is DOWN when missing and DEGRADED
    when it holds no ``YYYY-MM-DD.csv`` file.
    """

    def __init__(
        self,
        backend: str,
        mongo_database: Optional[MongoDatabase] = None,
        csv_directory: str = "",
        caches: Optional[Mapping[str, TTLCache[Any]]] = None,
    ) -> None:
        self._backend = EnumDataBackend(backend)
        self._mongo_database = mongo_database
        self._csv_directory = csv_directory
        self._caches = dict(caches or {})

    async def evaluate(self) -> SystemHealth:
        if self._backend == EnumDataBackend.CSV:
            source = self._check_csv_directory()
        else:
            source = await self._check_mongo()

        caches = tuple(
            CacheUsage(name=name, entries=len(cache), ttl_seconds=cache.ttl_seconds)
            for name, cache in sorted(self._caches.items())
        )
        return SystemHealth(source=source, caches=caches)

    async def _check_mongo(self) -> ReadingsSourceHealth:
        backend = EnumDataBackend.MONGO.value
        if not self._mongo_database:
            return ReadingsSourceHealth(
                backend=backend,
                status=ServiceStatus.UNKNOWN,
                message="Mongo database client not configured",
            )

        database_name = self._mongo_database.db.name
        start = perf_counter()
        try:
            await self._mongo_database.ping()
        except Exception as exc:
            return ReadingsSourceHealth(
                backend=backend,
                status=ServiceStatus.DOWN,
                location=database_name,
                message=f"MongoDB ping failed: {exc}",
                latency_ms=(perf_counter() - start) * 1000,
            )
        return ReadingsSourceHealth(
            backend=backend,
            status=ServiceStatus.UP,
            location=database_name,
            message="MongoDB ping successful",
            latency_ms=(perf_counter() - start) * 1000,
        )

    def _check_csv_directory(self) -> ReadingsSourceHealth:
        backend = EnumDataBackend.CSV.value
        directory = Path(self._csv_directory)
        if not self._csv_directory or not directory.is_dir():
            return ReadingsSourceHealth(
                backend=backend,
                status=ServiceStatus.DOWN,
                location=self._csv_directory,
                message="Readings directory not found",
            )

        files = sum(
            1
            for path in directory.iterdir()
            if FILE_PATTERN.match(path.name) and path.is_file()
        )
        if files == 0:
            return ReadingsSourceHealth(
                backend=backend,
                status=ServiceStatus.DEGRADED,
                location=self._csv_directory,
                message="Readings directory holds no daily CSV files",
                daily_files=0,
            )
        return ReadingsSourceHealth(
            backend=backend,
            status=ServiceStatus.UP,
            location=self._csv_directory,
            message=f"{files} daily CSV file(s) available",
            daily_files=files,
        )
