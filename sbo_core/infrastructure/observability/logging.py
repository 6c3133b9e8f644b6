"""structlog setup for SBO Core.

Production emits one JSON object per line; development uses structlog's
console renderer. A production line for a submission looks like:

    {"event": "submission_completed", "level": "info",
     "timestamp": "2026-03-15T09:30:00.000000Z",
     "service": "ObservationWorkflowService", "component": "workflow",
     "operation": "submit", "observation_id": "...", "correlation_id": "..."}

The minimum level is read from LOG_LEVEL (default INFO). Unknown level
names fall back to INFO.
"""

import logging
import os
from typing import cast

import structlog
from structlog.typing import Processor

from sbo_core.infrastructure.observability.correlation import correlation_id_processor

LOG_LEVEL_ENV = "LOG_LEVEL"
PRODUCTION = "production"


def resolve_log_level(name: str | None = None) -> int:
    """Map a level name to a stdlib logging level.

    Args:
        name: Level name such as "debug" or "WARNING". When None, the
            LOG_LEVEL environment variable is used.
    """
    raw = name if name is not None else os.environ.get(LOG_LEVEL_ENV, "INFO")
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def build_processors(environment: str) -> list[Processor]:
    """Processor chain ending in the renderer for the environment."""
    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if environment == PRODUCTION
        else structlog.dev.ConsoleRenderer(colors=True)
    )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        cast(Processor, correlation_id_processor),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


def configure_structlog(environment: str = PRODUCTION, level: str | None = None) -> None:
    """Install the global structlog configuration.

    Call once at startup, before services are built.

    Args:
        environment: "production" for JSON lines, anything else for
            console output.
        level: Optional level name overriding LOG_LEVEL.
    """
    structlog.configure(
        processors=build_processors(environment),
        wrapper_class=structlog.make_filtering_bound_logger(resolve_log_level(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
