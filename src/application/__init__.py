"""
Application Layer Package

Use cases turning aggregator snapshots into response DTOs, plus the
immutable monitoring configuration handed to the infrastructure layer.
"""

from src.application import dtos, models, use_cases

__all__ = ["dtos", "models", "use_cases"]
