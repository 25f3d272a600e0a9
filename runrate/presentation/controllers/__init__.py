"""
Controllers Package - Presentation Layer

FastAPI routers. Controllers validate input, map domain errors to HTTP
responses and delegate to the application use cases.
"""

from .predictions_controller import router as predictions_router
from .system_controller import router as system_router

__all__ = ["predictions_router", "system_router"]
