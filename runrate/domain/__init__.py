"""
Domain Layer Package

Entities, pure services, ports and repository interfaces. Nothing here
depends on frameworks or infrastructure.
"""

from runrate.domain import entities, ports, repositories, services

__all__ = ["entities", "ports", "repositories", "services"]
