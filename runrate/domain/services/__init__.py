"""
Domain Services Package

Pure calculations: calendar arithmetic, run-rate projection, confidence
scoring, the hybrid monthly engine and the series builders.
"""

from .confidence_scorer import score_confidence
from .daily_series_builder import (
    build_daily_totals,
    build_hourly_totals,
    group_by_meter,
)
from .day_forecaster import predict_today
from .hybrid_prediction_engine import HybridPredictionEngine
from .next_month_forecaster import EnsembleWeights, NextMonthForecaster
from .period_calendar import (
    days_in_month,
    month_name,
    next_period,
    previous_period,
    validate_not_future,
)
from .run_rate_projector import project

__all__ = [
    "score_confidence",
    "build_daily_totals",
    "build_hourly_totals",
    "group_by_meter",
    "predict_today",
    "HybridPredictionEngine",
    "EnsembleWeights",
    "NextMonthForecaster",
    "days_in_month",
    "month_name",
    "next_period",
    "previous_period",
    "validate_not_future",
    "project",
]
