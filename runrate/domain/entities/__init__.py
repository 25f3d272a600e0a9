"""
Domain Entities Package

Value objects for readings, predictions, forecasts and health.
"""

from .consumption import AvailablePeriod, DailyTotal, HourlyTotal, MeterReading
from .errors import (
    DomainError,
    FuturePeriodError,
    InsufficientDataError,
    InvalidPeriodError,
    NoReadingsError,
    ReadingsSourceError,
)
from .forecast import ForecastMethods, MeterForecast, NextMonthForecast
from .health import (
    ApplicationInfo,
    CacheUsage,
    ReadingsSourceHealth,
    ServiceStatus,
    SystemHealth,
)
from .prediction import (
    BlendWeights,
    Confidence,
    ConfidenceLevel,
    DayPrediction,
    FallbackMonthPrediction,
    HybridDetail,
    HybridMonthPrediction,
    HybridPolicy,
    MonthPrediction,
    PeriodDescriptor,
    PredictionMode,
    StandardMonthPrediction,
    ValueSource,
)

__all__ = [
    "AvailablePeriod",
    "DailyTotal",
    "HourlyTotal",
    "MeterReading",
    "DomainError",
    "FuturePeriodError",
    "InsufficientDataError",
    "InvalidPeriodError",
    "NoReadingsError",
    "ReadingsSourceError",
    "ForecastMethods",
    "MeterForecast",
    "NextMonthForecast",
    "ApplicationInfo",
    "CacheUsage",
    "ReadingsSourceHealth",
    "ServiceStatus",
    "SystemHealth",
    "BlendWeights",
    "Confidence",
    "ConfidenceLevel",
    "DayPrediction",
    "FallbackMonthPrediction",
    "HybridDetail",
    "HybridMonthPrediction",
    "HybridPolicy",
    "MonthPrediction",
    "PeriodDescriptor",
    "PredictionMode",
    "StandardMonthPrediction",
    "ValueSource",
]
