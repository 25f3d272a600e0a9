"""Previous-month loader used by the hybrid prediction engine."""

from __future__ import annotations

import asyncio
from typing import Dict, Optional, Sequence, Tuple

import structlog

from runrate.domain.entities.consumption import DailyTotal
from runrate.domain.ports.prior_period_loader import IPriorPeriodLoader
from runrate.domain.repositories.readings_repository import IReadingsRepository
from runrate.domain.services.daily_series_builder import (
    build_daily_totals,
    build_hourly_totals,
    group_by_meter,
)
from runrate.shared.ttl_cache import TTLCache

logger = structlog.get_logger(__name__)

DailySeries = Tuple[DailyTotal, ...]
MonthSeries = Dict[str, DailySeries]


class ReadingsPriorPeriodLoader(IPriorPeriodLoader):
    """
    Loads the daily totals of every meter for a whole month.

    The month is read from the source once and split per meter. The result,
    including an empty month, is kept in ``cache`` keyed by (year, month).
    Concurrent requests for the same month wait on a single read. A load
    slower than ``timeout_seconds`` is abandoned and reported as
    unavailable. Source errors propagate.
    """

    def __init__(
        self,
        readings_repository: IReadingsRepository,
        cache: TTLCache[MonthSeries],
        timeout_seconds: float = 5.0,
    ) -> None:
        self.readings_repository = readings_repository
        self.cache = cache
        self.timeout_seconds = timeout_seconds
        self._locks: Dict[Tuple[int, int], asyncio.Lock] = {}

    async def load(
        self, year: int, month: int, meter_id: str
    ) -> Optional[Sequence[DailyTotal]]:
        try:
            by_meter = await asyncio.wait_for(
                self._load_month(year, month), timeout=self.timeout_seconds
            )
        except asyncio.TimeoutError:
            logger.warning(
                "prior_period.timeout",
                meter_id=meter_id,
                period=f"{year}-{month:02d}",
                timeout_seconds=self.timeout_seconds,
            )
            return None

        return by_meter.get(meter_id) or None

    async def _load_month(self, year: int, month: int) -> MonthSeries:
        key = (year, month)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            cached = self.cache.get(key)
            if cached is not None:
                return cached

            readings = await self.readings_repository.find_month(year, month)
            by_meter: MonthSeries = {
                meter_id: tuple(build_daily_totals(build_hourly_totals(meter_readings)))
                for meter_id, meter_readings in group_by_meter(readings).items()
            }
            logger.debug(
                "prior_period.loaded",
                period=f"{year}-{month:02d}",
                meters=len(by_meter),
                records=len(readings),
            )
            self.cache.set(key, by_meter)
            return by_meter

    def invalidate(self) -> None:
        self.cache.clear()
