"""Observation workflow configuration.

This module defines dashboard targets, metric windows and collaborator
timeouts, with environment variable overrides for deployment tuning.

Environment Variables:
- SBO_MONTHLY_TARGET: Observations expected per observer per month (default: 8)
- SBO_YEARLY_TARGET: Observations expected per observer per year (default: 96)
- SBO_LEADERBOARD_DAYS: Rolling leaderboard window in days (default: 30)
- SBO_TOP_ASSIGNEES: Number of top action assignees reported (default: 3)
- SBO_TIME_SERIES_MONTHS: Months kept in the submissions series (default: 6)
- SBO_IO_TIMEOUT_SECONDS: Bound on each repository/blob-store call (default: 10.0)
- SBO_OPTIMISTIC_CONCURRENCY: Reject stale versioned writes (default: true)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float_env(key: str, default: float) -> float:
    """Get float environment variable with default."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_bool_env(key: str, default: bool) -> bool:
    """Get boolean environment variable with default.

    Unrecognized values fall back to the default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return default


@dataclass(frozen=True)
class WorkflowConfig:
    """Configuration for the observation workflow and dashboards.

    Attributes:
        monthly_target: Monthly observation target for progress ratios.
        yearly_target: Yearly observation target for progress ratios.
        leaderboard_days: Length of the rolling leaderboard window.
        top_assignees: How many top action assignees to report.
        time_series_months: How many month buckets to keep.
        io_timeout_seconds: Timeout applied to every collaborator call.
            Exceeding it is treated as a transient failure.
        optimistic_concurrency: When True, guarded writes carry the
            version they read and fail on conflict. When False, writes
            are last-write-wins.
    """

    monthly_target: int = 8
    yearly_target: int = 96
    leaderboard_days: int = 30
    top_assignees: int = 3
    time_series_months: int = 6
    io_timeout_seconds: float = 10.0
    optimistic_concurrency: bool = True

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.monthly_target < 1:
            raise ValueError(
                f"monthly_target must be positive, got {self.monthly_target}"
            )
        if self.yearly_target < 1:
            raise ValueError(f"yearly_target must be positive, got {self.yearly_target}")
        if self.leaderboard_days < 1:
            raise ValueError(
                f"leaderboard_days must be positive, got {self.leaderboard_days}"
            )
        if self.top_assignees < 1:
            raise ValueError(f"top_assignees must be positive, got {self.top_assignees}")
        if self.time_series_months < 1:
            raise ValueError(
                f"time_series_months must be positive, got {self.time_series_months}"
            )
        if self.io_timeout_seconds <= 0:
            raise ValueError(
                f"io_timeout_seconds must be positive, got {self.io_timeout_seconds}"
            )

    @classmethod
    def from_environment(cls) -> WorkflowConfig:
        """Create config from environment variables with defaults.

        Returns:
            WorkflowConfig with values from environment or defaults.
        """
        return cls(
            monthly_target=_get_int_env("SBO_MONTHLY_TARGET", 8),
            yearly_target=_get_int_env("SBO_YEARLY_TARGET", 96),
            leaderboard_days=_get_int_env("SBO_LEADERBOARD_DAYS", 30),
            top_assignees=_get_int_env("SBO_TOP_ASSIGNEES", 3),
            time_series_months=_get_int_env("SBO_TIME_SERIES_MONTHS", 6),
            io_timeout_seconds=_get_float_env("SBO_IO_TIMEOUT_SECONDS", 10.0),
            optimistic_concurrency=_get_bool_env("SBO_OPTIMISTIC_CONCURRENCY", True),
        )


DEFAULT_WORKFLOW_CONFIG = WorkflowConfig()

# Short timeout for unit tests exercising the timeout path
TEST_WORKFLOW_CONFIG = WorkflowConfig(io_timeout_seconds=0.05)
