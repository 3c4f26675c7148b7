"""
Infrastructure Layer Package

This package contains implementations of interfaces defined in the
domain layer, dealing with external concerns such as operating system
probes, subsystem collectors and the status aggregator.
"""

from src.infrastructure import collectors, probes, services

__all__ = ["collectors", "probes", "services"]
