"""Domain entities for the next-month ensemble forecast."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict


@dataclass(frozen=True, slots=True)
class ForecastMethods:
    """Full-month totals produced by each ensemble member."""

    simple_average: float
    recent_trend: float
    day_of_week: float


@dataclass(frozen=True, slots=True)
class MeterForecast:
    meter_id: str
    forecast_kwh: float
    avg_daily: float
    recent_avg_daily: float
    days_analyzed: int
    confidence: str
    methods: ForecastMethods


@dataclass(frozen=True, slots=True)
class NextMonthForecast:
    """Forecast of a whole target month computed from a source month."""

    source_year: int
    source_month: int
    target_year: int
    target_month: int
    days_in_target: int
    total_forecast_kwh: float
    generated_at: datetime
    per_meter: Dict[str, MeterForecast] = field(default_factory=dict)
