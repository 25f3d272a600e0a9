"""
Shared module - Cross-cutting concerns / Shared Layer

Constants, enums, logging helpers and the TTL cache used by every other layer.
It must not depend on Infrastructure or Frameworks.
"""

from .consts import EnumDataBackend, EnumEnvironment, EnumLogLevel
from .logging import configure_logging, get_logger, update_logging_from_settings
from .ttl_cache import TTLCache

__all__ = [
    "EnumDataBackend",
    "EnumEnvironment",
    "EnumLogLevel",
    "TTLCache",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
