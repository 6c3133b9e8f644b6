"""Bootstrap wiring for logging configuration."""

from __future__ import annotations

import os

from sbo_core.infrastructure.observability import (
    configure_structlog as _configure_structlog,
)


def configure_structlog(environment: str | None = None) -> None:
    """Configure structlog for the given environment.

    Falls back to the ``SBO_ENVIRONMENT`` variable, then "development".
    """
    _configure_structlog(
        environment=environment or os.environ.get("SBO_ENVIRONMENT", "development")
    )


__all__ = ["configure_structlog"]
