"""Bootstrap wiring for observation services.

Builds one set of services around shared collaborators. Collaborators not
supplied by the caller fall back to in-memory stubs. Nothing is held at
module level: every call returns an independent container.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from structlog import get_logger

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
from sbo_core.application.services.dashboard_service import DashboardService
from sbo_core.application.services.observation_feed_service import (
    ObservationFeedService,
)
from sbo_core.application.services.observation_workflow_service import (
    ObservationWorkflowService,
)
from sbo_core.config.workflow_config import WorkflowConfig
from sbo_core.domain.models.catalog import DEFAULT_CATALOG, ObservationCatalog
from sbo_core.domain.models.identity import Identity
from sbo_core.infrastructure.adapters.system_time_authority import SystemTimeAuthority
from sbo_core.infrastructure.cache.offline_cache import InMemoryOfflineCache
from sbo_core.infrastructure.stubs.blob_store_stub import BlobStoreStub
from sbo_core.infrastructure.stubs.directory_stub import DirectoryStub
from sbo_core.infrastructure.stubs.notification_publisher_stub import (
    NotificationPublisherStub,
)
from sbo_core.infrastructure.stubs.observation_repository_stub import (
    ObservationRepositoryStub,
)

logger = get_logger()


@dataclass(frozen=True)
class ObservationServices:
    """Wired services and the collaborators they share."""

    workflow: ObservationWorkflowService
    feed: ObservationFeedService
    dashboard: DashboardService
    repository: ObservationRepositoryProtocol
    blob_store: BlobStoreProtocol
    publisher: NotificationPublisherProtocol | None
    directory: DirectoryProtocol
    cache: OfflineCacheProtocol
    time_authority: TimeAuthorityProtocol
    config: WorkflowConfig


def build_observation_services(
    *,
    repository: ObservationRepositoryProtocol | None = None,
    blob_store: BlobStoreProtocol | None = None,
    publisher: NotificationPublisherProtocol | None = None,
    directory: DirectoryProtocol | None = None,
    identities: Iterable[Identity] = (),
    cache: OfflineCacheProtocol | None = None,
    time_authority: TimeAuthorityProtocol | None = None,
    config: WorkflowConfig | None = None,
    catalog: ObservationCatalog = DEFAULT_CATALOG,
) -> ObservationServices:
    """Wire the workflow, feed and dashboard services.

    Args:
        repository: Observation repository (default: in-memory stub).
        blob_store: Image store (default: in-memory stub).
        publisher: Notification publisher (default: recording stub).
        directory: Identity registry (default: stub seeded with identities).
        identities: Seed for the default directory; ignored when a
            directory is supplied.
        cache: Offline cache (default: in-memory).
        time_authority: Clock (default: system local time).
        config: Workflow configuration (default: read from environment).
        catalog: Closed vocabularies.

    Returns:
        ObservationServices container.
    """
    repository = repository or ObservationRepositoryStub()
    blob_store = blob_store or BlobStoreStub()
    publisher = publisher or NotificationPublisherStub()
    directory = directory or DirectoryStub(identities)
    cache = cache or InMemoryOfflineCache()
    time_authority = time_authority or SystemTimeAuthority()
    config = config or WorkflowConfig.from_environment()

    feed = ObservationFeedService(repository, cache, config=config, catalog=catalog)
    services = ObservationServices(
        workflow=ObservationWorkflowService(
            repository,
            blob_store,
            time_authority,
            publisher=publisher,
            config=config,
            catalog=catalog,
        ),
        feed=feed,
        dashboard=DashboardService(feed, directory, time_authority, config=config),
        repository=repository,
        blob_store=blob_store,
        publisher=publisher,
        directory=directory,
        cache=cache,
        time_authority=time_authority,
        config=config,
    )

    logger.info(
        "observation_services_initialized",
        repository_type=type(repository).__name__,
        blob_store_type=type(blob_store).__name__,
        optimistic_concurrency=config.optimistic_concurrency,
    )
    return services
