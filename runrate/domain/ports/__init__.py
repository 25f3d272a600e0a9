"""
Ports Package - Domain Layer

Protocols implemented by the infrastructure layer.
"""

from .health_check import IHealthCheckService
from .prior_period_loader import IPriorPeriodLoader, PriorPeriodFetch

__all__ = ["IHealthCheckService", "IPriorPeriodLoader", "PriorPeriodFetch"]
