"""
Health of the readings source and of the in-process caches in front of it.

Predictions depend on a single backing service, the readings source, so its
probe result decides the overall status. Cache usage is reported alongside
it to explain cold requests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Tuple


class ServiceStatus(str, Enum):
    UP = "up"
    DEGRADED = "degraded"
    DOWN = "down"
    UNKNOWN = "unknown"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class ReadingsSourceHealth:
    """
    Outcome of probing the configured readings backend.

    ``location`` is the readings directory for the CSV backend and the
    database name for MongoDB. ``daily_files`` is only known for the CSV
    backend; ``latency_ms`` only for MongoDB pings.
    """

    backend: str
    status: ServiceStatus
    location: str = ""
    message: str = ""
    latency_ms: Optional[float] = None
    daily_files: Optional[int] = None
    checked_at: datetime = field(default_factory=_utc_now)


@dataclass(frozen=True, slots=True)
class CacheUsage:
    name: str
    entries: int
    ttl_seconds: float

    @property
    def enabled(self) -> bool:
        return self.ttl_seconds > 0


@dataclass(frozen=True, slots=True)
class SystemHealth:
    source: ReadingsSourceHealth
    caches: Tuple[CacheUsage, ...] = ()

    @property
    def status(self) -> ServiceStatus:
        return self.source.status

    @property
    def is_serving(self) -> bool:
        """False when no prediction can be served until the source recovers."""
        return self.source.status is not ServiceStatus.DOWN


@dataclass(frozen=True, slots=True)
class ApplicationInfo:
    name: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float
    health: SystemHealth
    source_uri: Optional[str]
    hybrid_threshold_days: int
