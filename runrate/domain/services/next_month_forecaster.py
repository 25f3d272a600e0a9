"""
Next-Month Forecaster - Domain Service

Forecasts the month after a source month from each meter's daily totals in
that source month, as a weighted ensemble of three projections:

* simple average    - mean daily energy x days in the target month
* recent trend      - mean of the last ``recent_days`` days x days in target
* day-of-week       - per-weekday means summed over the target calendar
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Dict, List, Mapping, Optional, Sequence

from runrate.domain.entities.consumption import DailyTotal
from runrate.domain.entities.forecast import (
    ForecastMethods,
    MeterForecast,
    NextMonthForecast,
)
from runrate.domain.services.period_calendar import days_in_month, next_period


@dataclass(frozen=True, slots=True)
class EnsembleWeights:
    simple_average: float = 0.3
    recent_trend: float = 0.4
    day_of_week: float = 0.3

    def __post_init__(self) -> None:
        total = self.simple_average + self.recent_trend + self.day_of_week
        if not math.isclose(total, 1.0):
            raise ValueError("ensemble weights must sum to 1")


class NextMonthForecaster:
    def __init__(
        self,
        weights: Optional[EnsembleWeights] = None,
        recent_days: int = 7,
        high_confidence_days: int = 20,
        medium_confidence_days: int = 10,
    ) -> None:
        self.weights = weights or EnsembleWeights()
        self.recent_days = recent_days
        self.high_confidence_days = high_confidence_days
        self.medium_confidence_days = medium_confidence_days

    def forecast(
        self,
        daily_by_meter: Mapping[str, Sequence[DailyTotal]],
        source_year: int,
        source_month: int,
        generated_at: Optional[datetime] = None,
    ) -> NextMonthForecast:
        target_year, target_month = next_period(source_year, source_month)
        target_days = days_in_month(target_year, target_month)
        target_weekdays = [
            date(target_year, target_month, day).weekday()
            for day in range(1, target_days + 1)
        ]

        per_meter: Dict[str, MeterForecast] = {}
        for meter_id in sorted(daily_by_meter):
            series = daily_by_meter[meter_id]
            if not series:
                continue
            per_meter[meter_id] = self._forecast_meter(
                meter_id, series, target_days, target_weekdays
            )

        return NextMonthForecast(
            source_year=source_year,
            source_month=source_month,
            target_year=target_year,
            target_month=target_month,
            days_in_target=target_days,
            total_forecast_kwh=math.fsum(f.forecast_kwh for f in per_meter.values()),
            generated_at=generated_at or datetime.now(timezone.utc),
            per_meter=per_meter,
        )

    def _forecast_meter(
        self,
        meter_id: str,
        series: Sequence[DailyTotal],
        target_days: int,
        target_weekdays: List[int],
    ) -> MeterForecast:
        values = [entry.energy_kwh for entry in series]
        day_count = len(values)

        avg_daily = math.fsum(values) / day_count
        recent = values[-min(self.recent_days, day_count):]
        recent_avg = math.fsum(recent) / len(recent)

        weekday_totals = [0.0] * 7
        weekday_counts = [0] * 7
        for entry in series:
            weekday = entry.date.weekday()
            weekday_totals[weekday] += entry.energy_kwh
            weekday_counts[weekday] += 1
        weekday_means = [
            weekday_totals[i] / weekday_counts[i] if weekday_counts[i] else avg_daily
            for i in range(7)
        ]

        methods = ForecastMethods(
            simple_average=avg_daily * target_days,
            recent_trend=recent_avg * target_days,
            day_of_week=math.fsum(weekday_means[w] for w in target_weekdays),
        )
        forecast = (
            methods.simple_average * self.weights.simple_average
            + methods.recent_trend * self.weights.recent_trend
            + methods.day_of_week * self.weights.day_of_week
        )

        if day_count >= self.high_confidence_days:
            confidence = "high"
        elif day_count >= self.medium_confidence_days:
            confidence = "medium"
        else:
            confidence = "low"

        return MeterForecast(
            meter_id=meter_id,
            forecast_kwh=forecast,
            avg_daily=avg_daily,
            recent_avg_daily=recent_avg,
            days_analyzed=day_count,
            confidence=confidence,
            methods=methods,
        )
