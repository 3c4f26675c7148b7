"""
Domain Errors

This module defines custom error classes for domain-specific exceptions.
"""

from typing import Any, Dict, List, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class UnknownSubsystemError(DomainError):
    """Raised when a subsystem name does not match any monitored subsystem."""

    def __init__(self, name: str, details: Optional[Dict[str, Any]] = None):
        message = f"Unknown subsystem '{name}'"
        super().__init__(message, details)
        self.name = name


class SnapshotIntegrityError(DomainError):
    """Raised when a snapshot is assembled without every subsystem."""

    def __init__(self, missing: List[str]):
        message = f"Status snapshot is missing subsystems: {', '.join(missing)}"
        super().__init__(message, {"missing": missing})


class InvalidQueryError(DomainError):
    """Raised when a recordings or logs query carries an unusable parameter."""

    def __init__(self, field: str, value: Any, reason: str):
        message = f"Invalid {field} '{value}': {reason}"
        super().__init__(message, {"field": field})
        self.field = field


class CatalogUnavailableError(DomainError):
    """Raised when a file or log listing could not be read from the host."""

    def __init__(self, view: str, reason: str):
        message = f"Unable to read {view}: {reason}"
        super().__init__(message, {"view": view})
        self.view = view
