"""
Infrastructure Layer Package

Implementations of the domain interfaces: the MongoDB client, the readings
repositories, the prior-period loader and the health check service.
"""

from runrate.infrastructure import repositories

__all__ = ["repositories"]
