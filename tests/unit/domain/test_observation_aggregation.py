"""Unit tests for the observation aggregation functions.

Tests cover:
- Progress ratios (clamping, invalid targets)
- Calendar month/year counts including month boundaries
- Completion rate and active actions
- Leaderboards (rolling and year-to-date, tie-breaking)
- Top assignees with name resolution
- Defaulters, month buckets, histograms, resolution time
"""

from datetime import datetime, timedelta, timezone

import pytest

from sbo_core.domain.models.identity import Role
from sbo_core.domain.models.metrics import LeaderboardWindow
from sbo_core.domain.models.observation import (
    ActionStatus,
    ObservationStatus,
    SBOKind,
)
from sbo_core.domain.services import observation_aggregation as agg
from tests.helpers import make_identity, make_observation

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)

ADA = make_identity("u-ada", "Ada Obi")
BAYO = make_identity("u-bayo", "Bayo Ade")
CHIDI = make_identity("u-chidi", "Chidi Nwosu")


def _at(days_ago: float = 0, **kwargs):
    return make_observation(created_at=NOW - timedelta(days=days_ago), **kwargs)


class TestProgressRatio:
    def test_ratio_below_target(self) -> None:
        result = agg.progress_ratio(4, 8)

        assert result.ratio == 0.5
        assert result.percentage == 50.0

    def test_ratio_is_clamped_at_one(self) -> None:
        result = agg.progress_ratio(12, 8)

        assert result.count == 12
        assert result.ratio == 1.0

    def test_zero_count(self) -> None:
        assert agg.progress_ratio(0, 96).ratio == 0.0

    @pytest.mark.parametrize("target", [0, -1])
    def test_non_positive_target_rejected(self, target: int) -> None:
        with pytest.raises(ValueError):
            agg.progress_ratio(1, target)


class TestCalendarCounts:
    def test_three_this_month_one_last_month(self) -> None:
        observations = [
            make_observation(ADA, created_at=datetime(2026, 3, 1, 0, 0, tzinfo=timezone.utc)),
            make_observation(ADA, created_at=datetime(2026, 3, 10, tzinfo=timezone.utc)),
            make_observation(ADA, created_at=NOW),
            make_observation(
                ADA, created_at=datetime(2026, 2, 28, 23, 59, tzinfo=timezone.utc)
            ),
        ]

        assert agg.monthly_count(observations, NOW) == 3
        assert agg.yearly_count(observations, NOW) == 4
        assert agg.monthly_progress(observations, NOW).ratio == 3 / 8
        assert agg.yearly_progress(observations, NOW).ratio == 4 / 96

    def test_previous_year_excluded_from_yearly(self) -> None:
        observations = [
            make_observation(created_at=datetime(2025, 12, 31, 23, 0, tzinfo=timezone.utc)),
            make_observation(created_at=datetime(2026, 1, 1, 0, 0, tzinfo=timezone.utc)),
        ]

        assert agg.yearly_count(observations, NOW) == 1

    def test_month_resolved_in_timezone_of_now(self) -> None:
        lagos = timezone(timedelta(hours=1))
        now = datetime(2026, 3, 1, 9, 0, tzinfo=lagos)
        # 23:30 UTC on Feb 28 is 00:30 on Mar 1 in UTC+1
        late_night = make_observation(
            created_at=datetime(2026, 2, 28, 23, 30, tzinfo=timezone.utc)
        )

        assert agg.monthly_count([late_night], now) == 1

    def test_same_month_previous_year_not_counted(self) -> None:
        observation = make_observation(
            created_at=datetime(2025, 3, 15, tzinfo=timezone.utc)
        )

        assert agg.monthly_count([observation], NOW) == 0


class TestActionMetrics:
    def test_completion_rate(self) -> None:
        observations = [
            _at(action_status=ActionStatus.COMPLETED),
            _at(action_status=ActionStatus.IN_PROGRESS),
            _at(action_status=ActionStatus.PENDING),
            _at(action_status=ActionStatus.COMPLETED),
            _at(kind=SBOKind.SAFE),
        ]

        assert agg.completion_rate(observations) == 0.5
        assert agg.active_actions(observations) == 2

    def test_completion_rate_without_actionable_is_zero(self) -> None:
        assert agg.completion_rate([_at(kind=SBOKind.SAFE)]) == 0.0
        assert agg.completion_rate([]) == 0.0

    def test_average_resolution_days(self) -> None:
        observations = [
            _at(
                action_status=ActionStatus.COMPLETED,
                action_assigned_at=NOW - timedelta(days=4),
                action_completed_at=NOW - timedelta(days=2),
            ),
            _at(
                action_status=ActionStatus.COMPLETED,
                action_assigned_at=NOW - timedelta(days=6),
                action_completed_at=NOW,
            ),
            _at(action_status=ActionStatus.COMPLETED),
        ]

        assert agg.average_resolution_days(observations) == pytest.approx(4.0)

    def test_average_resolution_unavailable(self) -> None:
        assert agg.average_resolution_days([_at(action_status=ActionStatus.COMPLETED)]) is None


class TestLeaderboard:
    def test_last_30_days_winner(self) -> None:
        observations = [
            _at(1, observer=ADA),
            _at(2, observer=BAYO),
            _at(3, observer=BAYO),
            _at(45, observer=ADA),
            _at(46, observer=ADA),
        ]

        entry = agg.leaderboard(observations, NOW, LeaderboardWindow.LAST_30_DAYS)

        assert entry is not None
        assert entry.display_name == "Bayo Ade"
        assert entry.count == 2

    def test_year_to_date_counts_from_january_first(self) -> None:
        observations = [
            _at(45, observer=ADA),
            _at(46, observer=ADA),
            _at(2, observer=BAYO),
            make_observation(
                BAYO, created_at=datetime(2025, 12, 30, tzinfo=timezone.utc)
            ),
            make_observation(
                BAYO, created_at=datetime(2025, 12, 31, tzinfo=timezone.utc)
            ),
        ]

        entry = agg.leaderboard(observations, NOW, LeaderboardWindow.YEAR_TO_DATE)

        assert entry is not None
        assert entry.display_name == "Ada Obi"
        assert entry.count == 2

    def test_observation_at_start_of_year_counts(self) -> None:
        first = make_observation(
            CHIDI, created_at=datetime(2026, 1, 1, 0, 0, tzinfo=timezone.utc)
        )

        entry = agg.leaderboard([first], NOW, LeaderboardWindow.YEAR_TO_DATE)

        assert entry is not None
        assert entry.display_name == "Chidi Nwosu"

    def test_year_to_date_is_short_in_early_january(self) -> None:
        early = datetime(2026, 1, 3, 9, 0, tzinfo=timezone.utc)
        observations = [
            make_observation(ADA, created_at=datetime(2025, 12, 20, tzinfo=timezone.utc)),
            make_observation(ADA, created_at=datetime(2025, 12, 28, tzinfo=timezone.utc)),
            make_observation(BAYO, created_at=datetime(2026, 1, 2, tzinfo=timezone.utc)),
        ]

        entry = agg.leaderboard(observations, early, LeaderboardWindow.YEAR_TO_DATE)

        assert entry is not None
        assert entry.display_name == "Bayo Ade"
        assert entry.count == 1

    def test_ties_broken_alphabetically(self) -> None:
        observations = [_at(1, observer=CHIDI), _at(2, observer=ADA)]

        entry = agg.leaderboard(observations, NOW, LeaderboardWindow.LAST_30_DAYS)

        assert entry is not None
        assert entry.display_name == "Ada Obi"

    def test_empty_window_returns_none(self) -> None:
        observations = [_at(90, observer=ADA)]

        assert agg.leaderboard(observations, NOW, LeaderboardWindow.LAST_30_DAYS) is None

    def test_custom_window_length(self) -> None:
        observations = [_at(10, observer=ADA)]

        assert (
            agg.leaderboard(observations, NOW, LeaderboardWindow.LAST_30_DAYS, days=7)
            is None
        )


class TestTopAssignees:
    def test_names_resolved_from_observer_snapshots(self) -> None:
        observations = [
            _at(observer=BAYO, action_assignee_id="u-ada"),
            _at(observer=ADA, action_assignee_id="u-ada"),
            _at(observer=ADA, action_assignee_id="u-bayo"),
            _at(observer=ADA, action_assignee_id="u-stranger"),
            _at(observer=ADA),
        ]

        result = agg.top_assignees(observations)

        assert [(a.display_name, a.count) for a in result] == [
            ("Ada Obi", 2),
            ("Bayo Ade", 1),
            ("u-stranger", 1),
        ]

    def test_limit(self) -> None:
        observations = [
            _at(observer=ADA, action_assignee_id=f"u-{n}") for n in range(5)
        ]

        assert len(agg.top_assignees(observations, limit=2)) == 2


class TestDefaulters:
    def test_month_boundary(self) -> None:
        identities = [ADA, BAYO, make_identity("u-john", "John Doe", Role.MANAGER)]
        now = datetime(2026, 3, 1, 0, 0, 30, tzinfo=timezone.utc)
        observations = [
            make_observation(ADA, created_at=datetime(2026, 3, 1, 0, 0, tzinfo=timezone.utc)),
            make_observation(
                BAYO, created_at=datetime(2026, 2, 28, 23, 59, 59, tzinfo=timezone.utc)
            ),
        ]

        result = agg.defaulters(identities, observations, now)

        assert [i.id for i in result] == ["u-bayo", "u-john"]

    def test_everyone_submitted(self) -> None:
        observations = [_at(observer=ADA), _at(observer=BAYO)]

        assert agg.defaulters([ADA, BAYO], observations, NOW) == ()


class TestSeriesAndHistograms:
    def test_monthly_series_keeps_last_months(self) -> None:
        observations = [
            make_observation(created_at=datetime(2025, month, 5, tzinfo=timezone.utc))
            for month in range(1, 13)
        ] + [_at(), _at()]

        series = agg.monthly_series(observations, NOW)

        assert [b.month_key for b in series] == [
            "2025-08",
            "2025-09",
            "2025-10",
            "2025-11",
            "2025-12",
            "2026-03",
        ]
        assert series[-1].count == 2

    def test_status_counts(self) -> None:
        observations = [
            _at(),
            _at(status=ObservationStatus.PENDING),
            _at(kind=SBOKind.SAFE),
            _at(kind=SBOKind.SAFE),
        ]

        counts = agg.status_counts(observations)

        assert (counts.open, counts.pending, counts.closed) == (1, 1, 2)
        assert counts.total() == 4

    def test_category_counts_first_seen_order(self) -> None:
        observations = [
            _at(category="Pollution", sub_category="Air"),
            _at(),
            _at(category="Pollution", sub_category="Water"),
        ]

        assert agg.category_counts(observations) == {"Pollution": 2, "PPE": 1}
        assert list(agg.category_counts(observations)) == ["Pollution", "PPE"]
