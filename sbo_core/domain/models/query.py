"""Repository query descriptors.

A QueryDescriptor is the only way the engine asks the repository for a
set of observations. Every descriptor orders by created_at descending.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class QueryKind(StrEnum):
    """Supported repository filters."""

    ALL = "all"
    BY_AREA_MANAGER_IN = "by_area_manager_in"
    BY_OBSERVER_ID = "by_observer_id"
    BY_ACTION_ASSIGNEE = "by_action_assignee"


@dataclass(frozen=True, eq=True)
class QueryDescriptor:
    """Filter and ordering for a repository query.

    Attributes:
        kind: Which filter applies.
        area_managers: Allowed area managers (BY_AREA_MANAGER_IN).
        observer_id: Required observer id (BY_OBSERVER_ID).
        assignee_id: Required action assignee (BY_ACTION_ASSIGNEE).
        order_by: Field to order by.
        descending: Sort direction.
    """

    kind: QueryKind
    area_managers: tuple[str, ...] = field(default=())
    observer_id: str | None = field(default=None)
    assignee_id: str | None = field(default=None)
    order_by: str = field(default="created_at")
    descending: bool = field(default=True)

    def __post_init__(self) -> None:
        """Validate that the filter arguments match the kind."""
        if self.kind == QueryKind.BY_OBSERVER_ID and not self.observer_id:
            raise ValueError("BY_OBSERVER_ID requires observer_id")
        if self.kind == QueryKind.BY_ACTION_ASSIGNEE and not self.assignee_id:
            raise ValueError("BY_ACTION_ASSIGNEE requires assignee_id")

    @classmethod
    def all(cls) -> QueryDescriptor:
        return cls(kind=QueryKind.ALL)

    @classmethod
    def by_area_managers(cls, area_managers: tuple[str, ...]) -> QueryDescriptor:
        return cls(kind=QueryKind.BY_AREA_MANAGER_IN, area_managers=area_managers)

    @classmethod
    def by_observer(cls, observer_id: str) -> QueryDescriptor:
        return cls(kind=QueryKind.BY_OBSERVER_ID, observer_id=observer_id)

    @classmethod
    def by_assignee(cls, assignee_id: str) -> QueryDescriptor:
        return cls(kind=QueryKind.BY_ACTION_ASSIGNEE, assignee_id=assignee_id)
