"""Unit tests for the Observation domain model.

Tests cover:
- Creation defaults (status by kind, actionable default)
- Structural invariants enforced on construction
- Immutable field protection in with_changes()
- Action sub-state guards (assign once, start, complete)
"""

from dataclasses import FrozenInstanceError
from datetime import datetime, timedelta, timezone

import pytest

from sbo_core.domain.errors import PreconditionError, ValidationError
from sbo_core.domain.models.identity import Role
from sbo_core.domain.models.observation import (
    ActionStatus,
    Comment,
    Focus,
    Observation,
    ObservationStatus,
    SBOKind,
)
from tests.helpers import make_identity, make_observation

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


def _create(kind: SBOKind, **overrides):
    fields = {
        "kind": kind,
        "focus": Focus.CONDITION,
        "location": "Lagos Plant",
        "unit": "Warehouse",
        "area_manager": "Sarah Smith",
        "category": "Work Environment",
        "sub_category": "Selection/condition",
        "description": "Pallet stacked above the marked line",
        "suggested_solution": "" if kind == SBOKind.SAFE else "Restack to two high",
        "author": make_identity("u-ada", "Ada Obi"),
        "created_at": NOW,
    }
    fields.update(overrides)
    return Observation.create(**fields)


class TestObservationCreate:
    """Tests for Observation.create()."""

    def test_safe_observation_is_created_closed(self) -> None:
        observation = _create(SBOKind.SAFE)

        assert observation.status == ObservationStatus.CLOSED
        assert observation.is_closed
        assert observation.is_actionable is False
        assert observation.action_status is None

    @pytest.mark.parametrize("kind", [SBOKind.UNSAFE, SBOKind.NEAR_MISS])
    def test_risk_observation_is_created_open_and_actionable(self, kind) -> None:
        observation = _create(kind)

        assert observation.status == ObservationStatus.OPEN
        assert observation.is_actionable is True
        assert observation.action_status == ActionStatus.PENDING
        assert observation.action_assignee_id is None

    def test_actionable_override(self) -> None:
        observation = _create(SBOKind.UNSAFE, is_actionable=False)

        assert observation.is_actionable is False
        assert observation.action_status is None

    def test_observer_snapshot_copies_identity(self) -> None:
        author = make_identity("u-ada", "Ada Obi", Role.OBSERVER, "Quality")
        observation = _create(SBOKind.UNSAFE, author=author)

        assert observation.observer.id == "u-ada"
        assert observation.observer.display_name == "Ada Obi"
        assert observation.observer.department == "Quality"
        assert observation.observer.role == Role.OBSERVER

    def test_new_observation_has_no_id_and_no_comments(self) -> None:
        observation = _create(SBOKind.NEAR_MISS)

        assert observation.id is None
        assert observation.comments == ()
        assert observation.version == 0

    def test_deadline_dropped_when_not_actionable(self) -> None:
        observation = _create(
            SBOKind.SAFE, action_deadline=NOW + timedelta(days=7)
        )

        assert observation.action_deadline is None


class TestObservationInvariants:
    """Construction-time invariants."""

    def test_empty_description_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            _create(SBOKind.SAFE, description="   ")

        assert "Observation description is required." in exc_info.value.errors

    def test_unsafe_without_solution_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            _create(SBOKind.UNSAFE, suggested_solution="")

        assert (
            "Suggested Solution is mandatory for unsafe acts or near misses."
            in exc_info.value.errors
        )

    def test_safe_without_solution_allowed(self) -> None:
        observation = _create(SBOKind.SAFE, suggested_solution="")

        assert observation.suggested_solution == ""

    def test_actionable_without_action_status_rejected(self) -> None:
        with pytest.raises(ValidationError):
            make_observation(is_actionable=True, action_status=None)

    def test_action_status_without_actionable_rejected(self) -> None:
        with pytest.raises(ValidationError):
            make_observation(is_actionable=False, action_status=ActionStatus.PENDING)

    def test_observation_is_frozen(self) -> None:
        observation = make_observation()

        with pytest.raises(FrozenInstanceError):
            observation.status = ObservationStatus.CLOSED  # type: ignore[misc]


class TestWithChanges:
    """Tests for with_changes() and with_comment()."""

    def test_merges_mutable_fields(self) -> None:
        observation = make_observation()

        updated = observation.with_changes({"area_manager": "Olu Bakare"})

        assert updated.area_manager == "Olu Bakare"
        assert observation.area_manager == "John Doe"

    @pytest.mark.parametrize(
        "field_name", ["id", "kind", "observer", "created_at", "comments", "version"]
    )
    def test_rejects_immutable_fields(self, field_name: str) -> None:
        observation = make_observation()

        with pytest.raises(ValueError, match="Immutable"):
            observation.with_changes({field_name: None})

    def test_rejects_unknown_fields(self) -> None:
        with pytest.raises(ValueError, match="Unknown"):
            make_observation().with_changes({"priority": "high"})

    def test_with_comment_appends_in_order(self) -> None:
        first = Comment("c1", "u-john", "John Doe", "Checking", NOW)
        second = Comment("c2", "u-ada", "Ada Obi", "Thanks", NOW + timedelta(hours=1))

        observation = (
            make_observation()
            .with_comment(first, ObservationStatus.PENDING)
            .with_comment(second, ObservationStatus.PENDING)
        )

        assert [c.id for c in observation.comments] == ["c1", "c2"]
        assert observation.status == ObservationStatus.PENDING

    def test_reassignment_reopens(self) -> None:
        observation = make_observation(status=ObservationStatus.PENDING)

        changes = observation.reassignment_changes("Michael Chen")

        assert changes == {
            "area_manager": "Michael Chen",
            "status": ObservationStatus.OPEN,
        }

    def test_closure_records_closer_and_time(self) -> None:
        changes = make_observation().closure_changes("u-john", NOW)

        assert changes["status"] == ObservationStatus.CLOSED
        assert changes["closed_by"] == "u-john"
        assert changes["closed_at"] == NOW


class TestActionTransitions:
    """Remediation action sub-state guards."""

    def test_assignment_sets_assignee_and_timestamp(self) -> None:
        deadline = NOW + timedelta(days=14)
        changes = make_observation(id="sbo-1").action_assignment_changes(
            "u-bayo", NOW, deadline
        )

        assert changes["action_assignee_id"] == "u-bayo"
        assert changes["action_status"] == ActionStatus.PENDING
        assert changes["action_assigned_at"] == NOW
        assert changes["action_deadline"] == deadline

    def test_assignment_on_non_actionable_rejected(self) -> None:
        observation = make_observation(id="sbo-1", kind=SBOKind.SAFE)

        with pytest.raises(PreconditionError, match="not actionable"):
            observation.action_assignment_changes("u-bayo", NOW)

    def test_second_assignment_rejected(self) -> None:
        observation = make_observation(id="sbo-1", action_assignee_id="u-bayo")

        with pytest.raises(PreconditionError) as exc_info:
            observation.action_assignment_changes("u-ada", NOW)

        assert exc_info.value.observation_id == "sbo-1"
        assert "already assigned" in exc_info.value.reason

    def test_start_requires_assignee(self) -> None:
        with pytest.raises(PreconditionError, match="no assignee"):
            make_observation(id="sbo-1").action_start_changes()

    def test_start_from_pending(self) -> None:
        observation = make_observation(id="sbo-1", action_assignee_id="u-bayo")

        assert observation.action_start_changes() == {
            "action_status": ActionStatus.IN_PROGRESS
        }

    def test_start_from_completed_rejected(self) -> None:
        observation = make_observation(
            id="sbo-1",
            action_assignee_id="u-bayo",
            action_status=ActionStatus.COMPLETED,
        )

        with pytest.raises(PreconditionError, match="cannot move"):
            observation.action_start_changes()

    @pytest.mark.parametrize(
        "status",
        [ActionStatus.PENDING, ActionStatus.IN_PROGRESS, ActionStatus.COMPLETED],
    )
    def test_completion_allowed_from_any_action_status(self, status) -> None:
        observation = make_observation(id="sbo-1", action_status=status)

        changes = observation.action_completion_changes(NOW)

        assert changes["action_status"] == ActionStatus.COMPLETED
        assert changes["action_completed_at"] == NOW

    def test_completion_on_non_actionable_rejected(self) -> None:
        with pytest.raises(PreconditionError):
            make_observation(kind=SBOKind.SAFE).action_completion_changes(NOW)

    def test_valid_transitions(self) -> None:
        assert ActionStatus.PENDING.valid_transitions() == frozenset(
            {ActionStatus.IN_PROGRESS, ActionStatus.COMPLETED}
        )
        assert ActionStatus.IN_PROGRESS.valid_transitions() == frozenset(
            {ActionStatus.COMPLETED}
        )
