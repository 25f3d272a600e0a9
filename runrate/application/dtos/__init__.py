"""
DTOs Package - Application Layer

Data Transfer Objects exchanged between the application layer and the
presentation layer.
"""

from .forecast_dto import AvailableMonthDTO, AvailableMonthsDTO, NextMonthForecastDTO
from .health_dto import (
    ApplicationInfoDTO,
    CacheUsageDTO,
    ReadingsSourceHealthDTO,
    SystemHealthDTO,
)
from .prediction_dto import (
    DayPredictionDTO,
    ErrorResponseDTO,
    MeterPredictionDTO,
    MonthPredictionDTO,
    PredictionFailureDTO,
    PredictionsResponseDTO,
)

__all__ = [
    "AvailableMonthDTO",
    "AvailableMonthsDTO",
    "NextMonthForecastDTO",
    "ApplicationInfoDTO",
    "CacheUsageDTO",
    "ReadingsSourceHealthDTO",
    "SystemHealthDTO",
    "DayPredictionDTO",
    "ErrorResponseDTO",
    "MeterPredictionDTO",
    "MonthPredictionDTO",
    "PredictionFailureDTO",
    "PredictionsResponseDTO",
]
