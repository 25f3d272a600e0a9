from __future__ import annotations

from datetime import datetime, timezone

from runrate.application.dtos.health_dto import (
    ApplicationInfoDTO,
    ReadingsSourceHealthDTO,
    SystemHealthDTO,
)
from runrate.domain.entities.health import (
    ApplicationInfo,
    CacheUsage,
    ReadingsSourceHealth,
    ServiceStatus,
    SystemHealth,
)

CSV_SOURCE = ReadingsSourceHealth(
    backend="csv",
    status=ServiceStatus.UP,
    location="/srv/readings",
    message="3 daily CSV file(s) available",
    daily_files=3,
)


def test_source_health_dto_rounds_latency() -> None:
    source = ReadingsSourceHealth(
        backend="mongo", status=ServiceStatus.UP, location="energy", latency_ms=4.23456
    )

    dto = ReadingsSourceHealthDTO.from_domain(source)

    assert dto.latency_ms == 4.23
    assert dto.daily_files is None
    assert dto.location == "energy"


def test_system_health_dto_lists_caches() -> None:
    health = SystemHealth(
        source=CSV_SOURCE,
        caches=(CacheUsage(name="prior_period", entries=2, ttl_seconds=300.0),),
    )

    payload = SystemHealthDTO.from_domain(health).model_dump(mode="json")

    assert payload["status"] == "up"
    assert payload["source"]["daily_files"] == 3
    assert payload["caches"] == [
        {"name": "prior_period", "entries": 2, "ttl_seconds": 300.0, "enabled": True}
    ]


def test_application_info_dto_from_domain() -> None:
    now = datetime.now(timezone.utc)
    info = ApplicationInfo(
        name="Energy Run-Rate Forecaster",
        description="desc",
        version="1.0",
        environment="development",
        git_commit="abc",
        build_time="2025-03-01",
        started_at=now,
        uptime_seconds=42.123,
        health=SystemHealth(source=CSV_SOURCE),
        source_uri=None,
        hybrid_threshold_days=3,
    )

    dto = ApplicationInfoDTO.from_domain(info)

    assert dto.name == "Energy Run-Rate Forecaster"
    assert dto.status is ServiceStatus.UP
    assert dto.source.backend == "csv"
    assert dto.source_uri is None
    assert dto.uptime_seconds == 42.12
    assert dto.hybrid_threshold_days == 3
