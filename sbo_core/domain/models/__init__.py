"""Domain models for SBO Core.

Contains the observation entity, identities, query descriptors and
metric value objects. These models are immutable and contain no
infrastructure dependencies.
"""

from sbo_core.domain.models.catalog import DEFAULT_CATALOG, ObservationCatalog
from sbo_core.domain.models.identity import Identity, Role
from sbo_core.domain.models.notification import Notification, NotificationKind
from sbo_core.domain.models.observation import (
    ActionStatus,
    Comment,
    Focus,
    Observation,
    ObservationStatus,
    ObserverSnapshot,
    SBOKind,
)
from sbo_core.domain.models.query import QueryDescriptor, QueryKind

__all__: list[str] = [
    "DEFAULT_CATALOG",
    "ActionStatus",
    "Comment",
    "Focus",
    "Identity",
    "Notification",
    "NotificationKind",
    "Observation",
    "ObservationCatalog",
    "ObservationStatus",
    "ObserverSnapshot",
    "QueryDescriptor",
    "QueryKind",
    "Role",
    "SBOKind",
]
