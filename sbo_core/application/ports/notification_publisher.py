"""Notification publisher port.

Publishing is fire-and-forget: callers log failures and never let them
fail the workflow operation that raised the notification.
"""

from __future__ import annotations

from typing import Protocol

from sbo_core.domain.models.notification import Notification


class NotificationPublisherProtocol(Protocol):
    """Port for delivering notifications to recipients."""

    async def publish(self, notification: Notification) -> None:
        """Publish a notification.

        Args:
            notification: The notification to deliver.
        """
        ...
