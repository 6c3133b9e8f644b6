"""Safety Behavioral Observation (SBO) domain model.

This module defines the central entity of the system together with its
status and remediation-action state machines.

Status axis:
    open --[comment]--> pending
    pending --[comment]--> pending
    open/pending --[reassign]--> open
    open/pending --[close]--> closed

    A comment always moves the observation to pending, including from
    closed. Re-entry from closed is not blocked.

Action axis (only when is_actionable):
    (unassigned) --[assign]--> pending
    pending --[start]--> in-progress
    pending/in-progress --[complete]--> completed

Observations are frozen. Every transition returns the field changes to
write through the repository; the repository returns the merged record.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import StrEnum
from typing import Any

from sbo_core.domain.errors.observation import PreconditionError, ValidationError
from sbo_core.domain.models.identity import Identity, Role


class SBOKind(StrEnum):
    """Severity of an observation. Set at creation, immutable."""

    SAFE = "safe"
    UNSAFE = "unsafe"
    NEAR_MISS = "near-miss"


class Focus(StrEnum):
    """Whether the observation concerns an act or a condition."""

    ACT = "act"
    CONDITION = "condition"


class ObservationStatus(StrEnum):
    """Review status of an observation.

    States:
        OPEN: Routed to an area manager, awaiting review.
        PENDING: Under discussion (a comment was added).
        CLOSED: Reviewed and closed.
    """

    OPEN = "open"
    PENDING = "pending"
    CLOSED = "closed"


class ActionStatus(StrEnum):
    """Status of the remediation action on an actionable observation."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"

    def valid_transitions(self) -> frozenset[ActionStatus]:
        """Get valid action transitions from this status."""
        return ACTION_TRANSITION_MATRIX.get(self, frozenset())


# Re-completing is a caller concern and is not rejected here
ACTION_TRANSITION_MATRIX: dict[ActionStatus, frozenset[ActionStatus]] = {
    ActionStatus.PENDING: frozenset(
        {ActionStatus.IN_PROGRESS, ActionStatus.COMPLETED}
    ),
    ActionStatus.IN_PROGRESS: frozenset({ActionStatus.COMPLETED}),
    ActionStatus.COMPLETED: frozenset({ActionStatus.COMPLETED}),
}


@dataclass(frozen=True, eq=True)
class ObserverSnapshot:
    """Write-once copy of the submitting identity.

    Taken at creation time. Later Directory changes never alter it.
    """

    id: str
    display_name: str
    department: str
    role: Role

    @classmethod
    def from_identity(cls, identity: Identity) -> ObserverSnapshot:
        return cls(
            id=identity.id,
            display_name=identity.display_name,
            department=identity.department,
            role=identity.role,
        )


@dataclass(frozen=True, eq=True)
class Comment:
    """A single entry in an observation's append-only discussion.

    Attributes:
        id: Comment identifier.
        author_id: Identity id of the author.
        author_name: Display name of the author at the time of writing.
        text: Comment body.
        timestamp: When the comment was written.
    """

    id: str
    author_id: str
    author_name: str
    text: str
    timestamp: datetime


@dataclass(frozen=True, eq=True)
class Observation:
    """A Safety Behavioral Observation.

    Attributes:
        id: Repository-assigned identifier (None before creation).
        kind: safe, unsafe or near-miss.
        focus: act or condition.
        location: Plant location.
        unit: Unit within the location.
        area_manager: Area manager the observation is routed to.
        category: Observation category.
        sub_category: Subcategory belonging to category.
        description: What was observed.
        suggested_solution: Proposed remedy (required unless kind is safe).
        observer: Snapshot of the submitting identity.
        created_at: Submission timestamp.
        status: Review status.
        comments: Ordered, append-only discussion.
        image_ref: URL produced by the blob store.
        closed_at: Timestamp of the latest close.
        closed_by: Identity id of the latest closer.
        is_actionable: Whether a remediation action is tracked.
        action_assignee_id: Identity id the action is assigned to.
        action_status: Remediation status (defined iff is_actionable).
        action_deadline: Optional remediation deadline.
        action_assigned_at: When the action was assigned.
        action_completed_at: When the action was last completed.
        version: Write counter maintained by the repository.
    """

    kind: SBOKind
    focus: Focus
    location: str
    unit: str
    area_manager: str
    category: str
    sub_category: str
    description: str
    suggested_solution: str
    observer: ObserverSnapshot
    created_at: datetime
    status: ObservationStatus
    id: str | None = field(default=None)
    comments: tuple[Comment, ...] = field(default=())
    image_ref: str | None = field(default=None)
    closed_at: datetime | None = field(default=None)
    closed_by: str | None = field(default=None)
    is_actionable: bool = field(default=False)
    action_assignee_id: str | None = field(default=None)
    action_status: ActionStatus | None = field(default=None)
    action_deadline: datetime | None = field(default=None)
    action_assigned_at: datetime | None = field(default=None)
    action_completed_at: datetime | None = field(default=None)
    version: int = field(default=0)

    def __post_init__(self) -> None:
        """Validate structural invariants."""
        errors: list[str] = []
        if not self.description.strip():
            errors.append("Observation description is required.")
        if self.kind != SBOKind.SAFE and not self.suggested_solution.strip():
            errors.append(
                "Suggested Solution is mandatory for unsafe acts or near misses."
            )
        if self.is_actionable and self.action_status is None:
            errors.append("Actionable observations must carry an action status.")
        if not self.is_actionable and self.action_status is not None:
            errors.append("Only actionable observations may carry an action status.")
        if errors:
            raise ValidationError(errors)

    @classmethod
    def create(
        cls,
        *,
        kind: SBOKind,
        focus: Focus,
        location: str,
        unit: str,
        area_manager: str,
        category: str,
        sub_category: str,
        description: str,
        suggested_solution: str,
        author: Identity,
        created_at: datetime,
        image_ref: str | None = None,
        is_actionable: bool | None = None,
        action_deadline: datetime | None = None,
    ) -> Observation:
        """Build a new, not yet persisted observation.

        Safe observations are created closed; unsafe and near-miss ones
        are created open. Unless overridden, an observation is actionable
        exactly when it is not safe.
        """
        actionable = kind != SBOKind.SAFE if is_actionable is None else is_actionable
        return cls(
            kind=kind,
            focus=focus,
            location=location,
            unit=unit,
            area_manager=area_manager,
            category=category,
            sub_category=sub_category,
            description=description,
            suggested_solution=suggested_solution,
            observer=ObserverSnapshot.from_identity(author),
            created_at=created_at,
            status=(
                ObservationStatus.CLOSED
                if kind == SBOKind.SAFE
                else ObservationStatus.OPEN
            ),
            image_ref=image_ref,
            is_actionable=actionable,
            action_status=ActionStatus.PENDING if actionable else None,
            action_deadline=action_deadline if actionable else None,
        )

    @property
    def is_closed(self) -> bool:
        return self.status == ObservationStatus.CLOSED

    def with_changes(self, changes: Mapping[str, Any]) -> Observation:
        """Return a copy with the given fields merged in.

        Raises:
            ValueError: If a change names an unknown field or tries to
                rewrite an immutable one.
        """
        forbidden = IMMUTABLE_FIELDS.intersection(changes)
        if forbidden:
            raise ValueError(f"Immutable fields cannot be updated: {sorted(forbidden)}")
        unknown = set(changes) - MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown observation fields: {sorted(unknown)}")
        return replace(self, **dict(changes))

    def with_comment(self, comment: Comment, status: ObservationStatus) -> Observation:
        return replace(self, comments=self.comments + (comment,), status=status)

    def reassignment_changes(self, new_area_manager: str) -> dict[str, Any]:
        return {"area_manager": new_area_manager, "status": ObservationStatus.OPEN}

    def closure_changes(self, closer_id: str, now: datetime) -> dict[str, Any]:
        """Field changes for closing.

        Re-closing is allowed and records the latest closer and time.
        """
        return {
            "status": ObservationStatus.CLOSED,
            "closed_at": now,
            "closed_by": closer_id,
        }

    def action_assignment_changes(
        self,
        assignee_id: str,
        now: datetime,
        deadline: datetime | None = None,
    ) -> dict[str, Any]:
        """Field changes for assigning the remediation action.

        Raises:
            PreconditionError: If not actionable or already assigned.
        """
        self._require_actionable("assign action")
        if self.action_assignee_id is not None:
            raise PreconditionError(
                self._ref(),
                "assign action",
                f"action already assigned to {self.action_assignee_id}",
            )
        changes: dict[str, Any] = {
            "action_assignee_id": assignee_id,
            "action_status": ActionStatus.PENDING,
            "action_assigned_at": now,
        }
        if deadline is not None:
            changes["action_deadline"] = deadline
        return changes

    def action_start_changes(self) -> dict[str, Any]:
        """Field changes for starting work on the action.

        Raises:
            PreconditionError: If not actionable, unassigned or not pending.
        """
        self._require_actionable("start action")
        if self.action_assignee_id is None:
            raise PreconditionError(
                self._ref(), "start action", "action has no assignee"
            )
        self._require_action_transition(ActionStatus.IN_PROGRESS, "start action")
        return {"action_status": ActionStatus.IN_PROGRESS}

    def action_completion_changes(self, now: datetime) -> dict[str, Any]:
        """Field changes for completing the action.

        Raises:
            PreconditionError: If the observation is not actionable.
        """
        self._require_actionable("complete action")
        self._require_action_transition(ActionStatus.COMPLETED, "complete action")
        return {
            "action_status": ActionStatus.COMPLETED,
            "action_completed_at": now,
        }

    def _require_actionable(self, operation: str) -> None:
        if not self.is_actionable:
            raise PreconditionError(
                self._ref(), operation, "observation is not actionable"
            )

    def _require_action_transition(
        self, target: ActionStatus, operation: str
    ) -> None:
        # action_status is always set on actionable observations
        current = self.action_status or ActionStatus.PENDING
        if target not in current.valid_transitions():
            raise PreconditionError(
                self._ref(),
                operation,
                f"action status {current.value} cannot move to {target.value}",
            )

    def _ref(self) -> str:
        return self.id or "<unsaved>"


IMMUTABLE_FIELDS: frozenset[str] = frozenset(
    {"id", "kind", "focus", "observer", "created_at", "comments", "version"}
)

MUTABLE_FIELDS: frozenset[str] = frozenset(
    {
        "location",
        "unit",
        "area_manager",
        "category",
        "sub_category",
        "description",
        "suggested_solution",
        "status",
        "image_ref",
        "closed_at",
        "closed_by",
        "is_actionable",
        "action_assignee_id",
        "action_status",
        "action_deadline",
        "action_assigned_at",
        "action_completed_at",
    }
)
