"""Role-based visibility filter.

Maps an identity to the repository query that bounds what it may see:

- hse: every observation
- manager: observations routed to the manager's own name, provided that
  name is a recognized area manager
- observer: observations the identity submitted

All queries order by created_at descending. These functions are pure.
"""

from __future__ import annotations

from collections.abc import Iterable

from sbo_core.domain.errors.identity import UnknownRoleError
from sbo_core.domain.models.catalog import DEFAULT_CATALOG, ObservationCatalog
from sbo_core.domain.models.identity import Identity, Role
from sbo_core.domain.models.observation import Observation
from sbo_core.domain.models.query import QueryDescriptor


def visible_query(
    identity: Identity,
    catalog: ObservationCatalog = DEFAULT_CATALOG,
) -> QueryDescriptor:
    """Build the query an identity is allowed to run.

    Args:
        identity: Who is asking.
        catalog: Supplies the recognized area managers.

    Returns:
        The QueryDescriptor for the identity's role.

    Raises:
        UnknownRoleError: If the identity's role is outside the closed set.
    """
    match identity.role:
        case Role.HSE:
            return QueryDescriptor.all()
        case Role.MANAGER:
            own = tuple(
                name for name in catalog.area_managers if name == identity.display_name
            )
            return QueryDescriptor.by_area_managers(own)
        case Role.OBSERVER:
            return QueryDescriptor.by_observer(identity.id)
        case _:
            raise UnknownRoleError(identity.role)


def can_see(
    identity: Identity,
    observation: Observation,
    catalog: ObservationCatalog = DEFAULT_CATALOG,
) -> bool:
    """Whether an observation falls inside the identity's visible set."""
    match identity.role:
        case Role.HSE:
            return True
        case Role.MANAGER:
            return (
                catalog.is_area_manager(observation.area_manager)
                and observation.area_manager == identity.display_name
            )
        case Role.OBSERVER:
            return observation.observer.id == identity.id
        case _:
            raise UnknownRoleError(identity.role)


def manager_worklist(
    observations: Iterable[Observation],
    identity: Identity,
) -> list[Observation]:
    """Observations still awaiting review by the identity.

    hse sees every non-closed observation; a manager sees the non-closed
    ones routed to their name. Observers have no worklist.

    Raises:
        UnknownRoleError: If the identity's role is outside the closed set.
    """
    match identity.role:
        case Role.HSE:
            return [o for o in observations if not o.is_closed]
        case Role.MANAGER:
            return [
                o
                for o in observations
                if not o.is_closed and o.area_manager == identity.display_name
            ]
        case Role.OBSERVER:
            return []
        case _:
            raise UnknownRoleError(identity.role)
