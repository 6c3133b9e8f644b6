"""Observation aggregation functions.

Pure functions over a materialized observation set. Each takes the
observations (and, where needed, directory identities and a reference
instant ``now``) and returns a derived value. Nothing here performs I/O
or writes back.

Calendar-based metrics (monthly/yearly counts, defaulters, month
buckets) use the calendar fields of each timestamp converted into the
timezone of ``now``. They are not rolling windows.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta

from sbo_core.domain.models.identity import Identity
from sbo_core.domain.models.metrics import (
    AssigneeCount,
    LeaderboardEntry,
    LeaderboardWindow,
    MonthBucket,
    ProgressRatio,
    StatusCounts,
)
from sbo_core.domain.models.observation import (
    ActionStatus,
    Observation,
    ObservationStatus,
)

MONTHLY_TARGET = 8
YEARLY_TARGET = 96
DEFAULT_LEADERBOARD_DAYS = 30
DEFAULT_TOP_ASSIGNEES = 3
DEFAULT_SERIES_MONTHS = 6

_SECONDS_PER_DAY = 86_400.0


def _local(timestamp: datetime, now: datetime) -> datetime:
    if now.tzinfo is None or timestamp.tzinfo is None:
        return timestamp
    return timestamp.astimezone(now.tzinfo)


def _month_key(timestamp: datetime) -> str:
    return f"{timestamp.year:04d}-{timestamp.month:02d}"


def _in_calendar_month(observation: Observation, now: datetime) -> bool:
    created = _local(observation.created_at, now)
    return created.year == now.year and created.month == now.month


def _in_calendar_year(observation: Observation, now: datetime) -> bool:
    return _local(observation.created_at, now).year == now.year


def progress_ratio(count: int, target: int) -> ProgressRatio:
    """Clamp count / target into [0, 1].

    Args:
        count: Observations counted in the period.
        target: Period target.

    Returns:
        ProgressRatio with the capped ratio.

    Raises:
        ValueError: If target is not positive.
    """
    if target <= 0:
        raise ValueError(f"target must be positive, got {target}")
    ratio = min(max(count, 0) / target, 1.0)
    return ProgressRatio(count=count, target=target, ratio=ratio)


def monthly_count(observations: Iterable[Observation], now: datetime) -> int:
    """Count observations created in now's calendar month."""
    return sum(1 for o in observations if _in_calendar_month(o, now))


def yearly_count(observations: Iterable[Observation], now: datetime) -> int:
    """Count observations created in now's calendar year."""
    return sum(1 for o in observations if _in_calendar_year(o, now))


def monthly_progress(
    observations: Iterable[Observation],
    now: datetime,
    target: int = MONTHLY_TARGET,
) -> ProgressRatio:
    return progress_ratio(monthly_count(observations, now), target)


def yearly_progress(
    observations: Iterable[Observation],
    now: datetime,
    target: int = YEARLY_TARGET,
) -> ProgressRatio:
    return progress_ratio(yearly_count(observations, now), target)


def completion_rate(observations: Iterable[Observation]) -> float:
    """Fraction of actionable observations whose action is completed.

    Returns:
        A value in [0, 1]; 0.0 when there are no actionable observations.
    """
    actionable = [o for o in observations if o.is_actionable]
    if not actionable:
        return 0.0
    completed = sum(1 for o in actionable if o.action_status == ActionStatus.COMPLETED)
    return completed / len(actionable)


def active_actions(observations: Iterable[Observation]) -> int:
    """Count actionable observations whose action is not completed."""
    return sum(
        1
        for o in observations
        if o.is_actionable and o.action_status != ActionStatus.COMPLETED
    )


def _window_start(
    window: LeaderboardWindow, now: datetime, days: int
) -> datetime:
    match window:
        case LeaderboardWindow.LAST_30_DAYS:
            return now - timedelta(days=days)
        case LeaderboardWindow.YEAR_TO_DATE:
            # Strictly-after comparison below, so step back one microsecond
            start = now.replace(month=1, day=1, hour=0, minute=0, second=0, microsecond=0)
            return start - timedelta(microseconds=1)
        case _:
            raise ValueError(f"Unsupported leaderboard window: {window!r}")


def _ranked(counts: Counter[str]) -> list[tuple[str, int]]:
    # Highest count first; equal counts ordered alphabetically by name
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))


def leaderboard(
    observations: Iterable[Observation],
    now: datetime,
    window: LeaderboardWindow,
    days: int = DEFAULT_LEADERBOARD_DAYS,
) -> LeaderboardEntry | None:
    """Top submitter by observer display name within a window.

    Only observations with created_at strictly after the window start
    count. Ties are broken alphabetically by display name.

    YEAR_TO_DATE starts at January 1 of now's calendar year. This is a
    calendar window, not a rolling 365 days, so early in January it
    covers only a few days.

    Args:
        observations: The visible observation set.
        now: Reference instant.
        window: Which window to use.
        days: Length of the rolling window (LAST_30_DAYS only).

    Returns:
        The winning entry, or None when the window is empty.
    """
    start = _window_start(window, now, days)
    counts: Counter[str] = Counter(
        o.observer.display_name for o in observations if o.created_at > start
    )
    if not counts:
        return None
    name, count = _ranked(counts)[0]
    return LeaderboardEntry(display_name=name, count=count)


def top_assignees(
    observations: Sequence[Observation],
    limit: int = DEFAULT_TOP_ASSIGNEES,
) -> tuple[AssigneeCount, ...]:
    """Most frequent action assignees among actionable observations.

    The assignee id is resolved to a display name through any observation
    whose observer snapshot carries that id, falling back to the raw id.
    """
    names: dict[str, str] = {}
    for o in observations:
        names.setdefault(o.observer.id, o.observer.display_name)

    counts: Counter[str] = Counter(
        names.get(o.action_assignee_id, o.action_assignee_id)
        for o in observations
        if o.is_actionable and o.action_assignee_id
    )
    return tuple(
        AssigneeCount(display_name=name, count=count)
        for name, count in _ranked(counts)[:limit]
    )


def defaulters(
    identities: Iterable[Identity],
    observations: Iterable[Observation],
    now: datetime,
) -> tuple[Identity, ...]:
    """Directory identities with no observation in now's calendar month.

    Directory order is preserved.
    """
    submitted = {o.observer.id for o in observations if _in_calendar_month(o, now)}
    return tuple(identity for identity in identities if identity.id not in submitted)


def monthly_series(
    observations: Iterable[Observation],
    now: datetime,
    months: int = DEFAULT_SERIES_MONTHS,
) -> tuple[MonthBucket, ...]:
    """Counts for the most recent months that have observations.

    Buckets by (year, month), sorts ascending and keeps the last
    ``months`` buckets. Months with no observations are not emitted.
    """
    counts: Counter[str] = Counter(
        _month_key(_local(o.created_at, now)) for o in observations
    )
    keys = sorted(counts)[-months:] if months > 0 else []
    return tuple(MonthBucket(month_key=key, count=counts[key]) for key in keys)


def status_counts(observations: Iterable[Observation]) -> StatusCounts:
    counts = Counter(o.status for o in observations)
    return StatusCounts(
        open=counts[ObservationStatus.OPEN],
        pending=counts[ObservationStatus.PENDING],
        closed=counts[ObservationStatus.CLOSED],
    )


def category_counts(observations: Iterable[Observation]) -> dict[str, int]:
    """Counts grouped by category, in first-seen order."""
    return dict(Counter(o.category for o in observations))


def average_resolution_days(observations: Iterable[Observation]) -> float | None:
    """Mean time from action assignment to completion, in days.

    Only completed actions carrying both timestamps contribute.

    Returns:
        The mean in days, or None when no observation qualifies.
    """
    durations = [
        (o.action_completed_at - o.action_assigned_at).total_seconds()
        for o in observations
        if o.action_status == ActionStatus.COMPLETED
        and o.action_assigned_at is not None
        and o.action_completed_at is not None
    ]
    if not durations:
        return None
    return sum(durations) / len(durations) / _SECONDS_PER_DAY
