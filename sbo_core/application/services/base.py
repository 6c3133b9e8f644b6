"""Shared structured-logging behaviour for application services.

Every service logs through a logger bound once with its class name and a
component tag, then narrowed per call with the operation name, the
session correlation id and whatever ids the call is about:

    class ObservationFeedService(LoggingMixin):
        def __init__(self, repository: ObservationRepositoryProtocol) -> None:
            self._repository = repository
            self._init_logger(component="feed")

        async def fetch_visible(self, identity: Identity) -> FeedResult:
            log = self._log_operation("fetch_visible", identity_id=identity.id)
            log.debug("fetch_started")
"""

import structlog

from sbo_core.infrastructure.observability.correlation import get_correlation_id


class LoggingMixin:
    """Gives a service a bound structlog logger.

    Call ``_init_logger`` at the end of ``__init__``. Context values that
    are None are left out of the bound logger so log lines only carry
    ids that are actually known.

    Attributes:
        _log: Logger bound with ``service`` and ``component``.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "observation") -> None:
        """Bind the service-level logger.

        Args:
            component: Tag grouping this service's log lines
                (workflow, feed, dashboard...).
        """
        self._log = structlog.get_logger().bind(
            service=type(self).__name__,
            component=component,
        )

    def _log_operation(self, operation: str, **context: object) -> structlog.BoundLogger:
        """Return a logger scoped to one operation call.

        Args:
            operation: Operation name, e.g. "submit" or "close".
            **context: Ids and values describing the call.
        """
        bound = {key: value for key, value in context.items() if value is not None}
        correlation_id = get_correlation_id()
        if correlation_id:
            bound["correlation_id"] = correlation_id
        return self._log.bind(operation=operation, **bound)
