"""
Domain entities for monthly and daily run-rate predictions.

A monthly prediction is one of three variants discriminated by ``mode``:
``StandardMonthPrediction``, ``HybridMonthPrediction`` and
``FallbackMonthPrediction``. Only the hybrid variant carries blending detail
and only the fallback variant carries a reason.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import ClassVar, Dict, Optional, Union


class PredictionMode(str, Enum):
    STANDARD = "standard"
    HYBRID = "hybrid"
    STANDARD_FALLBACK = "standard_fallback"


class ValueSource(str, Enum):
    ACTUAL = "actual"
    PROJECTION = "projection"


class ConfidenceLevel(str, Enum):
    EXACT = "exact"
    VERY_HIGH = "very_high"
    HIGH = "high"
    MEDIUM = "medium"
    MEDIUM_HYBRID = "medium_hybrid"
    LOW_HYBRID = "low_hybrid"
    LOW = "low"
    VERY_LOW = "very_low"


@dataclass(frozen=True, slots=True)
class PeriodDescriptor:
    """
    Identifies the month to predict.

    ``year``/``month`` may be left unset to use the month of the latest
    observation. ``cutoff_day`` limits the data to days up to and including it.
    """

    year: Optional[int] = None
    month: Optional[int] = None
    cutoff_day: Optional[int] = None


@dataclass(frozen=True, slots=True)
class HybridPolicy:
    """Tunable constants of the hybrid blending strategy."""

    hybrid_threshold_days: int = 3
    weight_table: Dict[int, float] = field(
        default_factory=lambda: {1: 0.30, 2: 0.50}
    )
    default_current_weight: float = 0.30
    prior_completeness_ratio: float = 0.5
    min_days_required: int = 1

    def __post_init__(self) -> None:
        if self.hybrid_threshold_days < 1:
            raise ValueError("hybrid_threshold_days must be at least 1")
        if self.min_days_required < 1:
            raise ValueError("min_days_required must be at least 1")
        if not 0.0 <= self.prior_completeness_ratio <= 1.0:
            raise ValueError("prior_completeness_ratio must be within [0, 1]")
        weights = [self.default_current_weight, *self.weight_table.values()]
        if any(not 0.0 <= weight <= 1.0 for weight in weights):
            raise ValueError("current-period weights must be within [0, 1]")

    def current_weight(self, days_observed: int) -> float:
        return self.weight_table.get(days_observed, self.default_current_weight)


@dataclass(frozen=True, slots=True)
class Confidence:
    level: ConfidenceLevel
    score: int
    description: str
    enhancement: Optional[str] = None
    warning: Optional[str] = None


@dataclass(frozen=True, slots=True)
class BlendWeights:
    current: float
    previous: float


@dataclass(frozen=True, slots=True)
class HybridDetail:
    """Statistics of both periods and the weights used to blend them."""

    previous_year: int
    previous_month: int
    previous_total: float
    previous_days: int
    previous_average: float
    current_total: float
    current_days: int
    current_average: float
    weights: BlendWeights
    blended_average: float


@dataclass(frozen=True, slots=True)
class MonthPredictionBase:
    """Fields shared by every monthly prediction variant."""

    mode: ClassVar[PredictionMode]

    meter_id: Optional[str]
    year: int
    month: int
    cutoff_day: Optional[int]
    days_observed: int
    days_in_period: int
    total_current: float
    average_daily_rate: float
    predicted_total: float
    percent_complete: float
    is_complete: bool
    confidence: Confidence

    @property
    def value_source(self) -> ValueSource:
        return ValueSource.ACTUAL if self.is_complete else ValueSource.PROJECTION


@dataclass(frozen=True, slots=True)
class StandardMonthPrediction(MonthPredictionBase):
    mode: ClassVar[PredictionMode] = PredictionMode.STANDARD


@dataclass(frozen=True, slots=True)
class HybridMonthPrediction(MonthPredictionBase):
    mode: ClassVar[PredictionMode] = PredictionMode.HYBRID

    hybrid: HybridDetail


@dataclass(frozen=True, slots=True)
class FallbackMonthPrediction(MonthPredictionBase):
    mode: ClassVar[PredictionMode] = PredictionMode.STANDARD_FALLBACK

    reason: str
    warning: str


MonthPrediction = Union[
    StandardMonthPrediction, HybridMonthPrediction, FallbackMonthPrediction
]


@dataclass(frozen=True, slots=True)
class DayPrediction:
    """Hour-to-day projection for the latest day of a meter's series."""

    date: date
    hours_passed: int
    total_energy: float
    basic_prediction: float
    rolling_prediction: float
    rolling_window_used: int
    average_hourly_rate: float
    recent_hourly_rate: float
