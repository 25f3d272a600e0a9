"""Use cases for health and application info endpoints."""

from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from runrate.application.dtos.health_dto import ApplicationInfoDTO, SystemHealthDTO
from runrate.application.models import SystemInfo
from runrate.domain.entities.health import ApplicationInfo
from runrate.domain.ports.health_check import IHealthCheckService
from runrate.shared.consts import EnumDataBackend


class GetHealthStatusUseCase:
    def __init__(self, health_check_service: IHealthCheckService) -> None:
        self._health_check_service = health_check_service

    async def execute(self) -> SystemHealthDTO:
        system_health = await self._health_check_service.evaluate()
        return SystemHealthDTO.from_domain(system_health)


class GetApplicationInfoUseCase:
    """Combines build metadata, uptime and the readings source probe."""

    def __init__(
        self,
        health_check_service: IHealthCheckService,
        system_info: SystemInfo,
    ) -> None:
        self._health_check_service = health_check_service
        self._info = system_info

    async def execute(self, started_at: Optional[datetime]) -> ApplicationInfoDTO:
        system_health = await self._health_check_service.evaluate()

        now = datetime.now(timezone.utc)
        started = started_at or now

        source_uri = None
        if self._info.data_backend == EnumDataBackend.MONGO.value:
            source_uri = redact_credentials(self._info.mongo_uri)

        info = ApplicationInfo(
            name=self._info.title,
            description=self._info.description,
            version=self._info.version,
            environment=self._info.environment,
            git_commit=self._info.git_commit,
            build_time=self._info.build_time,
            started_at=started,
            uptime_seconds=max(0.0, (now - started).total_seconds()),
            health=system_health,
            source_uri=source_uri,
            hybrid_threshold_days=self._info.hybrid_threshold_days,
        )
        return ApplicationInfoDTO.from_domain(info)


def redact_credentials(url: str) -> str:
    """Strip the user and password from a connection URI."""
    if not url:
        return url

    parsed = urlsplit(url)
    if not (parsed.username or parsed.password):
        return url

    netloc = parsed.hostname or ""
    if parsed.port:
        netloc = f"{netloc}:{parsed.port}"
    return urlunsplit(
        (parsed.scheme, netloc, parsed.path, parsed.query, parsed.fragment)
    )
