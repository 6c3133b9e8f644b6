"""Application ports - Abstract interfaces for infrastructure adapters.

This module defines the contracts that infrastructure adapters must
implement. Ports enable dependency inversion and make the application
layer testable.
"""

from sbo_core.application.ports.blob_store import BlobStoreProtocol
from sbo_core.application.ports.directory import DirectoryProtocol
from sbo_core.application.ports.notification_publisher import (
    NotificationPublisherProtocol,
)
from sbo_core.application.ports.observation_repository import (
    ObservationRepositoryProtocol,
)
from sbo_core.application.ports.offline_cache import OfflineCacheProtocol
from sbo_core.application.ports.time_authority import TimeAuthorityProtocol

__all__: list[str] = [
    "BlobStoreProtocol",
    "DirectoryProtocol",
    "NotificationPublisherProtocol",
    "ObservationRepositoryProtocol",
    "OfflineCacheProtocol",
    "TimeAuthorityProtocol",
]
