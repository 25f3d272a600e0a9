"""
Application Use Case - Meter Predictions

Loads one month of readings and returns, for every meter, the projection
of its latest day and of the whole month. The flow is:
  * Validate the requested period (before touching the readings source)
  * Load the requested month, or the latest month holding readings
  * Roll each meter's readings up into hourly and daily totals
  * Run the day forecaster and the hybrid engine per meter, concurrently
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from functools import partial
from typing import Callable, List, Optional, Tuple, Union

import structlog

from runrate.application.dtos.prediction_dto import (
    DayPredictionDTO,
    MeterPredictionDTO,
    MonthPredictionDTO,
    PredictionFailureDTO,
    PredictionsResponseDTO,
    RequestedPeriodDTO,
)
from runrate.domain.entities.consumption import MeterReading
from runrate.domain.entities.errors import (
    InsufficientDataError,
    InvalidPeriodError,
    NoReadingsError,
)
from runrate.domain.entities.prediction import PeriodDescriptor
from runrate.domain.ports.prior_period_loader import IPriorPeriodLoader
from runrate.domain.repositories.readings_repository import IReadingsRepository
from runrate.domain.services.daily_series_builder import (
    build_daily_totals,
    build_hourly_totals,
    group_by_meter,
)
from runrate.domain.services.day_forecaster import predict_today
from runrate.domain.services.hybrid_prediction_engine import HybridPredictionEngine
from runrate.domain.services.period_calendar import validate_not_future

logger = structlog.get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PredictMetersUseCase:
    """Produces day and month predictions for every meter of one month."""

    def __init__(
        self,
        readings_repository: IReadingsRepository,
        prior_period_loader: IPriorPeriodLoader,
        engine: HybridPredictionEngine,
        min_hours_required: int = 3,
        rolling_window_hours: int = 6,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.readings_repository = readings_repository
        self.prior_period_loader = prior_period_loader
        self.engine = engine
        self.min_hours_required = min_hours_required
        self.rolling_window_hours = rolling_window_hours
        self._clock = clock or _utc_now

    async def execute(
        self,
        year: Optional[int] = None,
        month: Optional[int] = None,
        day: Optional[int] = None,
    ) -> PredictionsResponseDTO:
        """
        Predict every meter for the given month, or the latest one.

        Raises:
            InvalidPeriodError: Malformed or partial period parameters.
            FuturePeriodError: The period lies after today (UTC).
            NoReadingsError: Nothing to predict from.
            ReadingsSourceError: The readings source failed.
        """
        year, month = await self._resolve_period(year, month, day)

        readings = await self.readings_repository.find_month(year, month)
        if day is not None:
            readings = [r for r in readings if r.timestamp.day <= day]
        if not readings:
            raise NoReadingsError(
                f"No readings found for {year}-{month:02d}",
                {"year": year, "month": month, "day": day},
            )

        logger.info(
            "prediction.start",
            period=f"{year}-{month:02d}",
            cutoff_day=day,
            records=len(readings),
        )

        period = PeriodDescriptor(year=year, month=month, cutoff_day=day)
        grouped = group_by_meter(readings)
        meters = await asyncio.gather(
            *(
                self._predict_meter(meter_id, meter_readings, period)
                for meter_id, meter_readings in grouped.items()
            )
        )

        logger.info(
            "prediction.completed",
            period=f"{year}-{month:02d}",
            meters=len(meters),
        )

        return PredictionsResponseDTO(
            total_records=len(readings),
            period=RequestedPeriodDTO(year=year, month=month, cutoff_day=day),
            meters=list(meters),
        )

    async def _resolve_period(
        self, year: Optional[int], month: Optional[int], day: Optional[int]
    ) -> Tuple[int, int]:
        if (year is None) != (month is None):
            raise InvalidPeriodError(
                "Year and month must be provided together",
                {"year": year, "month": month},
            )
        if year is None or month is None:
            if day is not None:
                raise InvalidPeriodError(
                    "Day requires year and month", {"day": day}
                )
            latest = await self.readings_repository.find_latest_period()
            if latest is None:
                raise NoReadingsError("The readings source holds no readings")
            return latest

        validate_not_future(self._clock(), year, month, day)
        return year, month

    async def _predict_meter(
        self,
        meter_id: str,
        readings: List[MeterReading],
        period: PeriodDescriptor,
    ) -> MeterPredictionDTO:
        hourly = build_hourly_totals(readings)
        daily = build_daily_totals(hourly)

        today: Union[DayPredictionDTO, PredictionFailureDTO]
        try:
            today = DayPredictionDTO.from_domain(
                predict_today(
                    hourly,
                    min_hours_required=self.min_hours_required,
                    rolling_window_hours=self.rolling_window_hours,
                )
            )
        except InsufficientDataError as exc:
            today = _failure(exc)

        month: Union[MonthPredictionDTO, PredictionFailureDTO]
        try:
            prediction = await self.engine.predict_month(
                daily,
                period,
                load_prior_period=partial(
                    self.prior_period_loader.load, meter_id=meter_id
                ),
                meter_id=meter_id,
            )
            month = MonthPredictionDTO.from_domain(prediction)
        except InsufficientDataError as exc:
            month = _failure(exc)

        return MeterPredictionDTO(
            meter_id=meter_id,
            hours_processed=len(hourly),
            today=today,
            month=month,
        )


def _failure(exc: InsufficientDataError) -> PredictionFailureDTO:
    return PredictionFailureDTO(
        message=exc.message, found=exc.found, required=exc.required
    )
