"""Infrastructure services package."""

from .health_check_service import HealthCheckService
from .prior_period_loader import ReadingsPriorPeriodLoader

__all__ = ["HealthCheckService", "ReadingsPriorPeriodLoader"]
