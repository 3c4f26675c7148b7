"""
Domain Layer Package

This package contains the core monitoring rules of the application:
status value objects, probe and collector contracts, and the pure health
evaluation. It has no dependencies on frameworks or infrastructure.
"""

# Re-export submodules
from src.domain import entities, ports, services

__all__ = ["entities", "ports", "services"]
