"""
Use Cases Package - Application Layer

Use cases orchestrate the readings source and the domain services and
return DTOs to the presentation layer.
"""

from .forecast_use_cases import (
    ClearForecastCacheUseCase,
    GetAvailableMonthsUseCase,
    NextMonthForecastUseCase,
)
from .health_use_cases import GetApplicationInfoUseCase, GetHealthStatusUseCase
from .predict_meters_use_case import PredictMetersUseCase

__all__ = [
    "ClearForecastCacheUseCase",
    "GetAvailableMonthsUseCase",
    "NextMonthForecastUseCase",
    "GetApplicationInfoUseCase",
    "GetHealthStatusUseCase",
    "PredictMetersUseCase",
]
