"""
Presentation Layer Package

HTTP routers exposing the application use cases.
"""

from runrate.presentation import controllers

__all__ = ["controllers"]
