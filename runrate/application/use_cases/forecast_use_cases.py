"""Use cases for the next-month forecast and the available-months listing."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple

import structlog

from runrate.application.dtos.forecast_dto import (
    AvailableMonthDTO,
    AvailableMonthsDTO,
    NextMonthForecastDTO,
)
from runrate.domain.entities.errors import InvalidPeriodError, NoReadingsError
from runrate.domain.entities.forecast import NextMonthForecast
from runrate.domain.ports.prior_period_loader import IPriorPeriodLoader
from runrate.domain.repositories.readings_repository import IReadingsRepository
from runrate.domain.services.daily_series_builder import (
    build_daily_totals,
    build_hourly_totals,
    group_by_meter,
)
from runrate.domain.services.next_month_forecaster import NextMonthForecaster
from runrate.domain.services.period_calendar import validate_not_future
from runrate.shared.ttl_cache import TTLCache

logger = structlog.get_logger(__name__)


class NextMonthForecastUseCase:
    """Forecasts the month following a source month, with a TTL cache."""

    def __init__(
        self,
        readings_repository: IReadingsRepository,
        forecaster: NextMonthForecaster,
        cache: TTLCache[NextMonthForecast],
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.readings_repository = readings_repository
        self.forecaster = forecaster
        self.cache = cache
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def execute(
        self, year: Optional[int] = None, month: Optional[int] = None
    ) -> NextMonthForecastDTO:
        started = time.perf_counter()
        source_year, source_month = await self._resolve_source(year, month)

        key = (source_year, source_month)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(
                "forecast.cache_hit", source=f"{source_year}-{source_month:02d}"
            )
            return NextMonthForecastDTO.from_domain(
                cached, _elapsed_ms(started), cached=True
            )

        readings = await self.readings_repository.find_month(source_year, source_month)
        if not readings:
            raise NoReadingsError(
                f"No readings found for {source_year}-{source_month:02d}",
                {"year": source_year, "month": source_month},
            )

        daily_by_meter = {
            meter_id: build_daily_totals(build_hourly_totals(meter_readings))
            for meter_id, meter_readings in group_by_meter(readings).items()
        }
        forecast = self.forecaster.forecast(
            daily_by_meter, source_year, source_month, generated_at=self._clock()
        )
        self.cache.set(key, forecast)

        logger.info(
            "forecast.generated",
            source=f"{source_year}-{source_month:02d}",
            target=f"{forecast.target_year}-{forecast.target_month:02d}",
            meters=len(forecast.per_meter),
            total_kwh=round(forecast.total_forecast_kwh, 2),
        )
        return NextMonthForecastDTO.from_domain(forecast, _elapsed_ms(started))

    async def _resolve_source(
        self, year: Optional[int], month: Optional[int]
    ) -> Tuple[int, int]:
        if (year is None) != (month is None):
            raise InvalidPeriodError(
                "Year and month must be provided together",
                {"year": year, "month": month},
            )
        if year is None or month is None:
            latest = await self.readings_repository.find_latest_period()
            if latest is None:
                raise NoReadingsError("The readings source holds no readings")
            return latest

        validate_not_future(self._clock(), year, month)
        return year, month


class ClearForecastCacheUseCase:
    """Drops cached forecasts and cached previous-month series."""

    def __init__(
        self,
        forecast_cache: TTLCache[NextMonthForecast],
        prior_period_loader: IPriorPeriodLoader,
    ) -> None:
        self.forecast_cache = forecast_cache
        self.prior_period_loader = prior_period_loader

    def execute(self) -> None:
        self.forecast_cache.clear()
        self.prior_period_loader.invalidate()
        logger.info("forecast.cache_cleared")


class GetAvailableMonthsUseCase:
    def __init__(self, readings_repository: IReadingsRepository) -> None:
        self.readings_repository = readings_repository

    async def execute(self) -> AvailableMonthsDTO:
        periods = await self.readings_repository.find_available_periods()
        months: List[AvailableMonthDTO] = [
            AvailableMonthDTO.from_domain(period) for period in periods
        ]
        return AvailableMonthsDTO(months=months)


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000
