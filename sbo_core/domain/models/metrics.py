"""Observation metrics domain models.

Value objects produced by the aggregation functions and assembled into
the supervisor dashboard. All frozen.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from sbo_core.domain.models.identity import Identity


class LeaderboardWindow(StrEnum):
    """Time window a leaderboard is computed over.

    Windows:
        LAST_30_DAYS: Rolling window ending at now.
        YEAR_TO_DATE: From the start of now's calendar year.
    """

    LAST_30_DAYS = "last_30_days"
    YEAR_TO_DATE = "year_to_date"


@dataclass(frozen=True)
class ProgressRatio:
    """Progress of a count against a fixed target.

    Attributes:
        count: Observations counted in the period.
        target: Target for the period (always positive).
        ratio: min(count / target, 1.0).
    """

    count: int
    target: int
    ratio: float

    @property
    def percentage(self) -> float:
        """Capped percentage in [0, 100]."""
        return self.ratio * 100.0


@dataclass(frozen=True)
class LeaderboardEntry:
    """Top submitter for a window.

    Attributes:
        display_name: Observer display name.
        count: Observations submitted in the window.
    """

    display_name: str
    count: int


@dataclass(frozen=True)
class AssigneeCount:
    """Actionable observations grouped by resolved assignee name."""

    display_name: str
    count: int


@dataclass(frozen=True)
class MonthBucket:
    """Observation count for one calendar month.

    Attributes:
        month_key: "YYYY-MM".
        count: Observations created in that month.
    """

    month_key: str
    count: int


@dataclass(frozen=True)
class StatusCounts:
    """Observation counts by review status."""

    open: int
    pending: int
    closed: int

    def total(self) -> int:
        """Return total observation count across all statuses."""
        return self.open + self.pending + self.closed


@dataclass(frozen=True)
class DashboardSummary:
    """Complete supervisor dashboard for one identity's visible set.

    Attributes:
        computed_at: The reference instant all metrics use.
        total_observations: Size of the visible set.
        monthly_progress: Progress against the monthly target.
        yearly_progress: Progress against the yearly target.
        completion_rate: Completed / total actionable, 0.0 when none.
        active_actions: Actionable observations not yet completed.
        top_submitter_30d: Leaderboard winner for the rolling window.
        top_submitter_ytd: Leaderboard winner for the calendar year.
        top_assignees: Most-assigned action owners.
        defaulters: Directory identities with no submission this month.
        monthly_series: Last months with at least one observation.
        status_counts: Histogram by status.
        category_counts: Histogram by category.
        average_resolution_days: Mean assignment-to-completion time in
            days, or None when no completed action carries both
            timestamps.
        degraded: True when the visible set came from the offline cache.
    """

    computed_at: datetime
    total_observations: int
    monthly_progress: ProgressRatio
    yearly_progress: ProgressRatio
    completion_rate: float
    active_actions: int
    top_submitter_30d: LeaderboardEntry | None
    top_submitter_ytd: LeaderboardEntry | None
    top_assignees: tuple[AssigneeCount, ...]
    defaulters: tuple[Identity, ...]
    monthly_series: tuple[MonthBucket, ...]
    status_counts: StatusCounts
    category_counts: dict[str, int]
    average_resolution_days: float | None
    degraded: bool = False
