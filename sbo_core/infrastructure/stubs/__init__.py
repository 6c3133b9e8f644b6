"""In-memory stub implementations of the application ports.

For development and testing only.
"""

from sbo_core.infrastructure.stubs.blob_store_stub import BlobStoreStub
from sbo_core.infrastructure.stubs.directory_stub import DirectoryStub
from sbo_core.infrastructure.stubs.notification_publisher_stub import (
    NotificationPublisherStub,
)
from sbo_core.infrastructure.stubs.observation_repository_stub import (
    ObservationRepositoryStub,
)

__all__: list[str] = [
    "BlobStoreStub",
    "DirectoryStub",
    "NotificationPublisherStub",
    "ObservationRepositoryStub",
]
