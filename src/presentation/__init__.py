"""
Presentation Layer Package

FastAPI routers for the service endpoints (/health, /info) and the
monitoring API under /api/monitoring.
"""

from src.presentation import controllers

__all__ = ["controllers"]
