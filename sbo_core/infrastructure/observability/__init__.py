"""Observability: structlog configuration and session correlation ids.

Usage:
    from sbo_core.infrastructure.observability import (
        configure_structlog,
        correlation_scope,
    )

    configure_structlog(environment="production")
    with correlation_scope() as correlation_id:
        await services.workflow.submit(draft, author)
"""

from sbo_core.infrastructure.observability.correlation import (
    correlation_id_processor,
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from sbo_core.infrastructure.observability.logging import (
    build_processors,
    configure_structlog,
    resolve_log_level,
)

__all__: list[str] = [
    "build_processors",
    "configure_structlog",
    "correlation_id_processor",
    "correlation_scope",
    "generate_correlation_id",
    "get_correlation_id",
    "resolve_log_level",
    "set_correlation_id",
]
