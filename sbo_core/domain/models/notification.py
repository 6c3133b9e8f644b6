"""Notification domain model.

Notifications are side-channel events handed to the notification
publisher. Delivery is best-effort.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import uuid4

from sbo_core.domain.models.observation import Observation


class NotificationKind(StrEnum):
    """Presentation hint for a notification."""

    ALERT = "alert"
    SUCCESS = "success"


@dataclass(frozen=True, eq=True)
class Notification:
    """An event addressed to a single recipient.

    Attributes:
        recipient: Area-manager name or identity id of the recipient.
        message: Text shown to the recipient.
        kind: info, alert or success.
        sbo_id: The observation the notification is about.
        timestamp: When the notification was raised.
        id: Notification identifier.
        read: Whether the recipient has seen it.
    """

    recipient: str
    message: str
    kind: NotificationKind
    sbo_id: str
    timestamp: datetime
    id: str = field(default_factory=lambda: str(uuid4()))
    read: bool = field(default=False)

    @classmethod
    def new_risk_alert(cls, observation: Observation, now: datetime) -> Notification:
        """Alert the area manager about a new unsafe or near-miss report."""
        return cls(
            recipient=observation.area_manager,
            message=(
                f"New {observation.kind.value} report from "
                f"{observation.observer.display_name} requires attention."
            ),
            kind=NotificationKind.ALERT,
            sbo_id=observation.id or "",
            timestamp=now,
        )

    @classmethod
    def closure_notice(cls, observation: Observation, now: datetime) -> Notification:
        """Tell the observer their report was reviewed and closed."""
        return cls(
            recipient=observation.observer.id,
            message=(
                f"Your safety report for {observation.category} has been reviewed "
                "and closed. Thank you for your vigilance."
            ),
            kind=NotificationKind.SUCCESS,
            sbo_id=observation.id or "",
            timestamp=now,
        )
