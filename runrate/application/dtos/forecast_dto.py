"""DTOs for the next-month forecast and the available-months listing."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List

from pydantic import BaseModel, Field

from runrate.domain.entities.consumption import AvailablePeriod
from runrate.domain.entities.forecast import MeterForecast, NextMonthForecast
from runrate.domain.services.period_calendar import month_name


def _round(value: float) -> float:
    return round(value, 2)


class ForecastPeriodDTO(BaseModel):
    year: int
    month: int
    month_name: str
    days_in_month: int


class ForecastMethodsDTO(BaseModel):
    simple_average: float
    recent_trend: float
    day_of_week: float


class MeterForecastDTO(BaseModel):
    forecast_kwh: float
    avg_daily: float
    recent_avg_daily: float
    days_analyzed: int
    confidence: str
    methods: ForecastMethodsDTO

    @classmethod
    def from_domain(cls, forecast: MeterForecast) -> "MeterForecastDTO":
        return cls(
            forecast_kwh=_round(forecast.forecast_kwh),
            avg_daily=_round(forecast.avg_daily),
            recent_avg_daily=_round(forecast.recent_avg_daily),
            days_analyzed=forecast.days_analyzed,
            confidence=forecast.confidence,
            methods=ForecastMethodsDTO(
                simple_average=_round(forecast.methods.simple_average),
                recent_trend=_round(forecast.methods.recent_trend),
                day_of_week=_round(forecast.methods.day_of_week),
            ),
        )


class SourcePeriodDTO(BaseModel):
    year: int
    month: int


class GenerationInfoDTO(BaseModel):
    timestamp: datetime
    processing_time_ms: float
    source_data: SourcePeriodDTO
    cached: bool = False


class NextMonthForecastDTO(BaseModel):
    """Payload of GET /api/forecast/next-month."""

    forecast_period: ForecastPeriodDTO
    total_forecast_kwh: float
    meter_count: int
    per_meter_forecasts: Dict[str, MeterForecastDTO] = Field(default_factory=dict)
    generation_info: GenerationInfoDTO

    @classmethod
    def from_domain(
        cls,
        forecast: NextMonthForecast,
        processing_time_ms: float,
        cached: bool = False,
    ) -> "NextMonthForecastDTO":
        return cls(
            forecast_period=ForecastPeriodDTO(
                year=forecast.target_year,
                month=forecast.target_month,
                month_name=month_name(forecast.target_month),
                days_in_month=forecast.days_in_target,
            ),
            total_forecast_kwh=_round(forecast.total_forecast_kwh),
            meter_count=len(forecast.per_meter),
            per_meter_forecasts={
                meter_id: MeterForecastDTO.from_domain(meter)
                for meter_id, meter in forecast.per_meter.items()
            },
            generation_info=GenerationInfoDTO(
                timestamp=forecast.generated_at,
                processing_time_ms=round(processing_time_ms, 1),
                source_data=SourcePeriodDTO(
                    year=forecast.source_year, month=forecast.source_month
                ),
                cached=cached,
            ),
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "forecast_period": {
                    "year": 2025,
                    "month": 4,
                    "month_name": "April",
                    "days_in_month": 30,
                },
                "total_forecast_kwh": 3120.55,
                "meter_count": 1,
                "per_meter_forecasts": {
                    "M1": {
                        "forecast_kwh": 3120.55,
                        "avg_daily": 103.2,
                        "recent_avg_daily": 105.9,
                        "days_analyzed": 31,
                        "confidence": "high",
                        "methods": {
                            "simple_average": 3096.0,
                            "recent_trend": 3177.0,
                            "day_of_week": 3067.5,
                        },
                    }
                },
                "generation_info": {
                    "timestamp": "2025-04-01T08:00:00Z",
                    "processing_time_ms": 12.4,
                    "source_data": {"year": 2025, "month": 3},
                    "cached": False,
                },
            }
        }
    }


class AvailableMonthDTO(BaseModel):
    year: int
    month: int
    month_name: str
    records: int

    @classmethod
    def from_domain(cls, period: AvailablePeriod) -> "AvailableMonthDTO":
        return cls(
            year=period.year,
            month=period.month,
            month_name=month_name(period.month),
            records=period.records,
        )


class AvailableMonthsDTO(BaseModel):
    """Payload of GET /api/months."""

    months: List[AvailableMonthDTO] = Field(default_factory=list)
