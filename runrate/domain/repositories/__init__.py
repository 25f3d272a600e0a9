"""
Repositories Package - Domain Layer

Repository interfaces; implementations live in the infrastructure layer.
"""

from .readings_repository import IReadingsRepository

__all__ = ["IReadingsRepository"]
