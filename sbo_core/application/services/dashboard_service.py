"""Supervisor dashboard service.

Assembles every dashboard metric for an identity's visible set from the
pure aggregation functions. All metrics share one reference instant.
The defaulter roster is the exception to visibility scoping: it is
computed over every stored submission.
"""

from __future__ import annotations

from sbo_core.application.ports.directory import DirectoryProtocol
from sbo_core.application.ports.time_authority import TimeAuthorityProtocol
from sbo_core.application.services.base import LoggingMixin
from sbo_core.application.services.observation_feed_service import (
    ObservationFeedService,
)
from sbo_core.config.workflow_config import DEFAULT_WORKFLOW_CONFIG, WorkflowConfig
from sbo_core.domain.models.identity import Identity, Role
from sbo_core.domain.models.metrics import DashboardSummary, LeaderboardWindow
from sbo_core.domain.services import observation_aggregation as agg


class DashboardService(LoggingMixin):
    """Builds DashboardSummary snapshots.

    Attributes:
        _feed: Read path for the visible set.
        _directory: Identity registry (defaulters are computed over it).
        _time: Time authority supplying the reference instant.
        _config: Targets, windows and limits.
    """

    def __init__(
        self,
        feed: ObservationFeedService,
        directory: DirectoryProtocol,
        time_authority: TimeAuthorityProtocol,
        config: WorkflowConfig = DEFAULT_WORKFLOW_CONFIG,
    ) -> None:
        self._feed = feed
        self._directory = directory
        self._time = time_authority
        self._config = config
        self._init_logger(component="dashboard")

    async def summarize(self, identity: Identity) -> DashboardSummary:
        """Compute the dashboard for what the identity can see.

        Args:
            identity: The viewer; bounds the observation set.

        Returns:
            DashboardSummary, flagged degraded when either read came from
            cache.
        """
        log = self._log_operation("summarize", identity_id=identity.id)
        feed = await self._feed.fetch_visible(identity)
        observations = feed.observations
        # Defaulters are site-wide: a submission the viewer cannot see still counts
        roster = (
            feed
            if identity.role == Role.HSE
            else await self._feed.fetch_all_submissions(identity)
        )
        now = self._time.now()
        config = self._config

        summary = DashboardSummary(
            computed_at=now,
            total_observations=len(observations),
            monthly_progress=agg.monthly_progress(
                observations, now, config.monthly_target
            ),
            yearly_progress=agg.yearly_progress(observations, now, config.yearly_target),
            completion_rate=agg.completion_rate(observations),
            active_actions=agg.active_actions(observations),
            top_submitter_30d=agg.leaderboard(
                observations, now, LeaderboardWindow.LAST_30_DAYS, config.leaderboard_days
            ),
            top_submitter_ytd=agg.leaderboard(
                observations, now, LeaderboardWindow.YEAR_TO_DATE
            ),
            top_assignees=agg.top_assignees(observations, config.top_assignees),
            defaulters=agg.defaulters(
                self._directory.list_all(), roster.observations, now
            ),
            monthly_series=agg.monthly_series(
                observations, now, config.time_series_months
            ),
            status_counts=agg.status_counts(observations),
            category_counts=agg.category_counts(observations),
            average_resolution_days=agg.average_resolution_days(observations),
            degraded=feed.degraded or roster.degraded,
        )

        log.info(
            "dashboard_computed",
            total=summary.total_observations,
            defaulters=len(summary.defaulters),
            degraded=summary.degraded,
        )
        return summary
