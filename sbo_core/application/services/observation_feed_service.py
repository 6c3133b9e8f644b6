"""Observation feed service (read path).

Reads the observations an identity is allowed to see. Successful reads
are written through to the offline cache; when the repository is
unreachable the last cached snapshot is served instead and the result is
flagged as degraded.
"""

from __future__ import annotations

from dataclasses import dataclass

from sbo_core.application.ports.observation_repository import (
    ObservationRepositoryProtocol,
)
from sbo_core.application.ports.offline_cache import OfflineCacheProtocol
from sbo_core.application.services.base import LoggingMixin
from sbo_core.application.services.io_guard import with_timeout
from sbo_core.application.services.visibility_filter import visible_query
from sbo_core.config.workflow_config import DEFAULT_WORKFLOW_CONFIG, WorkflowConfig
from sbo_core.domain.errors.io import TransientIOError
from sbo_core.domain.models.catalog import DEFAULT_CATALOG, ObservationCatalog
from sbo_core.domain.models.identity import Identity
from sbo_core.domain.models.observation import Observation
from sbo_core.domain.models.query import QueryDescriptor

ACTION_RECORDS_SUFFIX = ":actions"
ALL_SUBMISSIONS_SUFFIX = ":all"


@dataclass(frozen=True)
class FeedResult:
    """Observations returned by a feed read.

    Attributes:
        observations: The visible set, newest first.
        degraded: True when served from the offline cache after a failed
            live read.
    """

    observations: tuple[Observation, ...]
    degraded: bool = False

    def __len__(self) -> int:
        return len(self.observations)


class ObservationFeedService(LoggingMixin):
    """Visibility-filtered reads with offline fallback."""

    def __init__(
        self,
        repository: ObservationRepositoryProtocol,
        cache: OfflineCacheProtocol,
        config: WorkflowConfig = DEFAULT_WORKFLOW_CONFIG,
        catalog: ObservationCatalog = DEFAULT_CATALOG,
    ) -> None:
        self._repository = repository
        self._cache = cache
        self._config = config
        self._catalog = catalog
        self._init_logger(component="feed")

    async def fetch_visible(self, identity: Identity) -> FeedResult:
        """Fetch every observation the identity may see.

        Raises:
            UnknownRoleError: If the identity's role is outside the closed set.
        """
        return await self._fetch(
            identity.id, visible_query(identity, self._catalog), "fetch_visible"
        )

    async def fetch_action_records(self, identity: Identity) -> FeedResult:
        """Fetch observations whose remediation action is assigned to the identity."""
        return await self._fetch(
            f"{identity.id}{ACTION_RECORDS_SUFFIX}",
            QueryDescriptor.by_assignee(identity.id),
            "fetch_action_records",
        )

    async def fetch_all_submissions(self, identity: Identity) -> FeedResult:
        """Fetch every stored observation regardless of the identity's role.

        Used for site-wide figures such as the defaulter roster, which must
        know every submitter. Not for display: the records are outside
        the visibility filter. Cached per identity like the other reads.
        """
        return await self._fetch(
            f"{identity.id}{ALL_SUBMISSIONS_SUFFIX}",
            QueryDescriptor.all(),
            "fetch_all_submissions",
        )

    async def _fetch(
        self,
        cache_key: str,
        descriptor: QueryDescriptor,
        operation: str,
    ) -> FeedResult:
        log = self._log_operation(
            operation, cache_key=cache_key, query_kind=descriptor.kind.value
        )
        try:
            observations = await with_timeout(
                self._repository.query(descriptor),
                self._config.io_timeout_seconds,
                "observation_repository",
                "query",
            )
        except TransientIOError as e:
            cached = self._cache.on_fetch_failure(cache_key)
            log.warning(
                "fetch_degraded_to_cache", error=str(e), cached_count=len(cached)
            )
            return FeedResult(observations=cached, degraded=True)

        self._cache.on_successful_fetch(cache_key, observations)
        log.debug("fetch_completed", count=len(observations))
        return FeedResult(observations=tuple(observations))
