"""Application services for the observation workflow."""

from sbo_core.application.services.base import LoggingMixin
from sbo_core.application.services.dashboard_service import DashboardService
from sbo_core.application.services.io_guard import with_timeout
from sbo_core.application.services.observation_feed_service import (
    FeedResult,
    ObservationFeedService,
)
from sbo_core.application.services.observation_workflow_service import (
    ObservationWorkflowService,
)
from sbo_core.application.services.visibility_filter import (
    can_see,
    manager_worklist,
    visible_query,
)

__all__ = [
    "DashboardService",
    "FeedResult",
    "LoggingMixin",
    "ObservationFeedService",
    "ObservationWorkflowService",
    "can_see",
    "manager_worklist",
    "visible_query",
    "with_timeout",
]
