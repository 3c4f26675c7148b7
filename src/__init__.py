"""
Source Code Root Module

Fleet status monitor: a unified, deadline-bounded health view over the
recording, transfer, sampling, storage and network subsystems of a
recording host.

Layer Structure:
- Domain: Status value objects, probe contracts and health evaluation
- Application: Use cases, DTOs and the immutable monitoring configuration
- Infrastructure: Probes, subsystem collectors and the status aggregator
- Presentation: HTTP controllers
- Shared: Cross-cutting concerns (constants, logging)
- Main: Composition root, entry points and configuration
"""
