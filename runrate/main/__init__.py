"""
Main module - Main/Composition Root Layer

Entry point of the service: settings, the dependency container and the
FastAPI application factory.
"""

from .config import AppSettings, get_settings
from .container import AppContainer, get_container, init_container

__all__ = [
    "AppSettings",
    "get_settings",
    "AppContainer",
    "init_container",
    "get_container",
]
