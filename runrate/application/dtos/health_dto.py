"""DTOs for the /health and /info responses."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from runrate.domain.entities.health import (
    ApplicationInfo,
    CacheUsage,
    ReadingsSourceHealth,
    ServiceStatus,
    SystemHealth,
)


class ReadingsSourceHealthDTO(BaseModel):
    backend: str = Field(description="Configured readings backend (mongo or csv)")
    status: ServiceStatus
    location: str = Field(description="Readings directory or database name")
    message: str = ""
    latency_ms: Optional[float] = None
    daily_files: Optional[int] = Field(
        default=None, description="Daily CSV files found (csv backend only)"
    )
    checked_at: datetime

    @classmethod
    def from_domain(cls, source: ReadingsSourceHealth) -> "ReadingsSourceHealthDTO":
        return cls(
            backend=source.backend,
            status=source.status,
            location=source.location,
            message=source.message,
            latency_ms=round(source.latency_ms, 2)
            if source.latency_ms is not None
            else None,
            daily_files=source.daily_files,
            checked_at=source.checked_at,
        )


class CacheUsageDTO(BaseModel):
    name: str
    entries: int
    ttl_seconds: float
    enabled: bool

    @classmethod
    def from_domain(cls, cache: CacheUsage) -> "CacheUsageDTO":
        return cls(
            name=cache.name,
            entries=cache.entries,
            ttl_seconds=cache.ttl_seconds,
            enabled=cache.enabled,
        )


class SystemHealthDTO(BaseModel):
    """Payload of GET /health."""

    status: ServiceStatus = Field(description="Status of the readings source")
    source: ReadingsSourceHealthDTO
    caches: List[CacheUsageDTO] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, health: SystemHealth) -> "SystemHealthDTO":
        return cls(
            status=health.status,
            source=ReadingsSourceHealthDTO.from_domain(health.source),
            caches=[CacheUsageDTO.from_domain(cache) for cache in health.caches],
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "up",
                "source": {
                    "backend": "csv",
                    "status": "up",
                    "location": "/srv/readings",
                    "message": "32 daily CSV file(s) available",
                    "latency_ms": None,
                    "daily_files": 32,
                    "checked_at": "2025-03-09T12:00:00Z",
                },
                "caches": [
                    {
                        "name": "forecast",
                        "entries": 1,
                        "ttl_seconds": 600.0,
                        "enabled": True,
                    },
                    {
                        "name": "prior_period",
                        "entries": 2,
                        "ttl_seconds": 300.0,
                        "enabled": True,
                    },
                ],
            }
        }
    }


class ApplicationInfoDTO(BaseModel):
    """Payload of GET /info."""

    name: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float
    status: ServiceStatus
    source: ReadingsSourceHealthDTO
    source_uri: Optional[str] = Field(
        default=None, description="MongoDB URI without credentials"
    )
    hybrid_threshold_days: int

    @classmethod
    def from_domain(cls, info: ApplicationInfo) -> "ApplicationInfoDTO":
        return cls(
            name=info.name,
            description=info.description,
            version=info.version,
            environment=info.environment,
            git_commit=info.git_commit,
            build_time=info.build_time,
            started_at=info.started_at,
            uptime_seconds=round(info.uptime_seconds, 2),
            status=info.health.status,
            source=ReadingsSourceHealthDTO.from_domain(info.health.source),
            source_uri=info.source_uri,
            hybrid_threshold_days=info.hybrid_threshold_days,
        )
