"""
Application DTOs - Prediction

Wire shape of the /api/predict response. Field names are serialized in
camelCase to stay compatible with the existing dashboard; numeric values
are rounded to two decimals here and nowhere else.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from runrate.domain.entities.prediction import (
    Confidence,
    ConfidenceLevel,
    DayPrediction,
    FallbackMonthPrediction,
    HybridMonthPrediction,
    MonthPrediction,
    PredictionMode,
    ValueSource,
)

DECIMALS = 2


def _round(value: float) -> float:
    return round(value, DECIMALS)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ConfidenceDTO(CamelModel):
    level: ConfidenceLevel
    score: int = Field(ge=0, le=100)
    description: str
    enhancement: Optional[str] = None
    warning: Optional[str] = None

    @classmethod
    def from_domain(cls, confidence: Confidence) -> "ConfidenceDTO":
        return cls(
            level=confidence.level,
            score=confidence.score,
            description=confidence.description,
            enhancement=confidence.enhancement,
            warning=confidence.warning,
        )


class PeriodStatsDTO(CamelModel):
    year: Optional[int] = None
    month: Optional[int] = None
    total_kwh: float
    days: int
    avg_daily: float


class BlendWeightsDTO(CamelModel):
    current: float
    previous: float


class HybridBlendDTO(CamelModel):
    """Detail attached to a month predicted in hybrid mode."""

    mode: Literal["hybrid"] = "hybrid"
    previous_month: PeriodStatsDTO
    current_month: PeriodStatsDTO
    weights: BlendWeightsDTO
    hybrid_avg_daily: float

    @classmethod
    def from_domain(cls, prediction: HybridMonthPrediction) -> "HybridBlendDTO":
        detail = prediction.hybrid
        return cls(
            previous_month=PeriodStatsDTO(
                year=detail.previous_year,
                month=detail.previous_month,
                total_kwh=_round(detail.previous_total),
                days=detail.previous_days,
                avg_daily=_round(detail.previous_average),
            ),
            current_month=PeriodStatsDTO(
                year=prediction.year,
                month=prediction.month,
                total_kwh=_round(detail.current_total),
                days=detail.current_days,
                avg_daily=_round(detail.current_average),
            ),
            weights=BlendWeightsDTO(
                current=detail.weights.current, previous=detail.weights.previous
            ),
            hybrid_avg_daily=_round(detail.blended_average),
        )


class HybridFallbackDTO(CamelModel):
    """Detail attached when hybrid blending was attempted but abandoned."""

    mode: Literal["standard_fallback"] = "standard_fallback"
    reason: str
    warning: str


class MonthPredictionDTO(CamelModel):
    success: Literal[True] = True
    meter_id: Optional[str] = None
    year: int
    month: int
    cutoff_day: Optional[int] = None
    days_passed_month: int
    days_in_current_month: int
    total_energy_month: float
    predicted_month_kwh: float
    average_daily_rate: float
    percent_month_complete: float = Field(ge=0, le=100)
    is_complete: bool
    value_source: ValueSource
    prediction_mode: PredictionMode
    hybrid: Optional[Union[HybridBlendDTO, HybridFallbackDTO]] = None
    confidence: ConfidenceDTO

    @classmethod
    def from_domain(cls, prediction: MonthPrediction) -> "MonthPredictionDTO":
        hybrid: Optional[Union[HybridBlendDTO, HybridFallbackDTO]] = None
        if isinstance(prediction, HybridMonthPrediction):
            hybrid = HybridBlendDTO.from_domain(prediction)
        elif isinstance(prediction, FallbackMonthPrediction):
            hybrid = HybridFallbackDTO(
                reason=prediction.reason, warning=prediction.warning
            )

        return cls(
            meter_id=prediction.meter_id,
            year=prediction.year,
            month=prediction.month,
            cutoff_day=prediction.cutoff_day,
            days_passed_month=prediction.days_observed,
            days_in_current_month=prediction.days_in_period,
            total_energy_month=_round(prediction.total_current),
            predicted_month_kwh=_round(prediction.predicted_total),
            average_daily_rate=_round(prediction.average_daily_rate),
            percent_month_complete=_round(prediction.percent_complete),
            is_complete=prediction.is_complete,
            value_source=prediction.value_source,
            prediction_mode=prediction.mode,
            hybrid=hybrid,
            confidence=ConfidenceDTO.from_domain(prediction.confidence),
        )


class DayPredictionDTO(CamelModel):
    success: Literal[True] = True
    date: date
    hours_passed_today: int
    total_energy_today: float
    basic_prediction: float
    rolling_prediction: float
    rolling_window_used: int
    average_hourly_rate: float
    recent_hourly_rate: float

    @classmethod
    def from_domain(cls, prediction: DayPrediction) -> "DayPredictionDTO":
        return cls(
            date=prediction.date,
            hours_passed_today=prediction.hours_passed,
            total_energy_today=_round(prediction.total_energy),
            basic_prediction=_round(prediction.basic_prediction),
            rolling_prediction=_round(prediction.rolling_prediction),
            rolling_window_used=prediction.rolling_window_used,
            average_hourly_rate=_round(prediction.average_hourly_rate),
            recent_hourly_rate=_round(prediction.recent_hourly_rate),
        )


class PredictionFailureDTO(CamelModel):
    """Returned in place of a prediction when there is not enough data yet."""

    success: Literal[False] = False
    message: str
    found: int = 0
    required: int = 1


class MeterPredictionDTO(CamelModel):
    meter_id: str
    hours_processed: int
    today: Union[DayPredictionDTO, PredictionFailureDTO]
    month: Union[MonthPredictionDTO, PredictionFailureDTO]


class RequestedPeriodDTO(CamelModel):
    year: int
    month: int
    cutoff_day: Optional[int] = None


class PredictionsResponseDTO(CamelModel):
    """DTO returned by the prediction endpoint."""

    total_records: int
    period: RequestedPeriodDTO
    meters: List[MeterPredictionDTO] = Field(default_factory=list)


class ErrorResponseDTO(BaseModel):
    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)
