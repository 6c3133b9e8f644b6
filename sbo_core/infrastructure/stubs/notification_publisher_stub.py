"""Notification publisher stub implementation.

Records published notifications in memory for assertions. Real
implementations would push to devices or write to a notifications
collection.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from structlog import get_logger

from sbo_core.application.ports.notification_publisher import (
    NotificationPublisherProtocol,
)
from sbo_core.domain.models.notification import Notification

logger = get_logger(__name__)


@dataclass
class NotificationPublisherStub(NotificationPublisherProtocol):
    """Stub implementation of the notification publisher.

    Attributes:
        published: Every notification accepted so far.
        fail: When True, publish raises RuntimeError (testing).
    """

    published: list[Notification] = field(default_factory=list)
    fail: bool = False

    async def publish(self, notification: Notification) -> None:
        """Record the notification.

        Raises:
            RuntimeError: If fail is set.
        """
        if self.fail:
            logger.warning(
                "notification_publish_failed",
                recipient=notification.recipient,
                sbo_id=notification.sbo_id,
            )
            raise RuntimeError("Notification delivery unavailable")
        self.published.append(notification)
        logger.info(
            "notification_published",
            recipient=notification.recipient,
            kind=notification.kind.value,
            sbo_id=notification.sbo_id,
        )

    def for_recipient(self, recipient: str) -> list[Notification]:
        """Notifications addressed to a recipient."""
        return [n for n in self.published if n.recipient == recipient]
