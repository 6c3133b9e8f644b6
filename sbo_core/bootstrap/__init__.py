"""Composition root for wiring dependencies.

This package centralizes infrastructure-aware wiring so callers can depend
on application services without importing infrastructure directly.
"""

from sbo_core.bootstrap.logging import configure_structlog
from sbo_core.bootstrap.observation_services import (
    ObservationServices,
    build_observation_services,
)

__all__ = [
    "ObservationServices",
    "build_observation_services",
    "configure_structlog",
]
