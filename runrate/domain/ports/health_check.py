"""Domain port for health checks."""

from __future__ import annotations

from typing import Protocol

from runrate.domain.entities.health import SystemHealth


class IHealthCheckService(Protocol):
    async def evaluate(self) -> SystemHealth:
        """Probe the backing services and aggregate their status."""
        ...
