"""Observation repository stub implementation.

In-memory implementation of ObservationRepositoryProtocol for development
and testing. Writes are serialized with a lock to simulate the single
atomic write a document store provides per call.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import replace
from typing import Any
from uuid import uuid4

from structlog import get_logger

from sbo_core.application.ports.observation_repository import (
    ObservationRepositoryProtocol,
)
from sbo_core.domain.errors.io import TransientIOError
from sbo_core.domain.errors.observation import (
    ConcurrentModificationError,
    NotFoundError,
)
from sbo_core.domain.models.observation import Comment, Observation, ObservationStatus
from sbo_core.domain.models.query import QueryDescriptor, QueryKind

logger = get_logger(__name__)


class ObservationRepositoryStub(ObservationRepositoryProtocol):
    """In-memory stub implementation of ObservationRepositoryProtocol.

    NOT suitable for production use.

    Attributes:
        _observations: Dictionary mapping observation id to Observation.
        _unreachable: When True every call raises TransientIOError.
        _latency_seconds: Artificial delay applied to every call.
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self._observations: dict[str, Observation] = {}
        self._write_lock = asyncio.Lock()
        self._unreachable = False
        self._latency_seconds = 0.0

    async def create(self, observation: Observation) -> str:
        """Store a new observation and assign its id.

        Raises:
            ValueError: If the observation already carries an id.
            TransientIOError: If the stub is set unreachable.
        """
        await self._simulate_io("create")
        if observation.id is not None:
            raise ValueError(f"Observation already has an id: {observation.id}")
        async with self._write_lock:
            observation_id = str(uuid4())
            self._observations[observation_id] = replace(
                observation, id=observation_id, version=1
            )
        logger.debug("observation_created", observation_id=observation_id)
        return observation_id

    async def get(self, observation_id: str) -> Observation | None:
        await self._simulate_io("get")
        return self._observations.get(observation_id)

    async def query(self, descriptor: QueryDescriptor) -> list[Observation]:
        """List observations matching the descriptor, newest first."""
        await self._simulate_io("query")
        matching = [o for o in self._observations.values() if _matches(o, descriptor)]
        matching.sort(
            key=lambda o: getattr(o, descriptor.order_by),
            reverse=descriptor.descending,
        )
        return matching

    async def update(
        self,
        observation_id: str,
        changes: Mapping[str, Any],
        expected_version: int | None = None,
    ) -> Observation:
        """Merge field changes into a stored observation.

        Raises:
            NotFoundError: If the observation doesn't exist.
            ConcurrentModificationError: If expected_version is stale.
            TransientIOError: If the stub is set unreachable.
        """
        await self._simulate_io("update")
        async with self._write_lock:
            current = self._require(observation_id)
            if expected_version is not None and current.version != expected_version:
                raise ConcurrentModificationError(
                    observation_id=observation_id,
                    expected_version=expected_version,
                    actual_version=current.version,
                )
            updated = replace(
                current.with_changes(changes), version=current.version + 1
            )
            self._observations[observation_id] = updated
        return updated

    async def append_comment(
        self,
        observation_id: str,
        comment: Comment,
        status: ObservationStatus,
    ) -> Observation:
        """Append a comment and set the status in one write."""
        await self._simulate_io("append_comment")
        async with self._write_lock:
            current = self._require(observation_id)
            updated = replace(
                current.with_comment(comment, status), version=current.version + 1
            )
            self._observations[observation_id] = updated
        return updated

    def _require(self, observation_id: str) -> Observation:
        observation = self._observations.get(observation_id)
        if observation is None:
            raise NotFoundError(observation_id)
        return observation

    async def _simulate_io(self, operation: str) -> None:
        if self._latency_seconds:
            await asyncio.sleep(self._latency_seconds)
        if self._unreachable:
            logger.warning("repository_unreachable", operation=operation)
            raise TransientIOError("observation_repository", operation)

    # Test helpers

    def set_unreachable(self, unreachable: bool = True) -> None:
        """Make every subsequent call fail with TransientIOError."""
        self._unreachable = unreachable

    def set_latency(self, seconds: float) -> None:
        """Delay every subsequent call by the given number of seconds."""
        self._latency_seconds = seconds

    def seed(self, observation: Observation) -> Observation:
        """Insert an observation directly, keeping its id and timestamps.

        Assigns an id when the observation has none.
        """
        stored = observation if observation.id else replace(observation, id=str(uuid4()))
        if stored.version == 0:
            stored = replace(stored, version=1)
        self._observations[stored.id] = stored  # type: ignore[index]
        return stored

    def clear(self) -> None:
        """Clear all observations (for testing)."""
        self._observations.clear()


def _matches(observation: Observation, descriptor: QueryDescriptor) -> bool:
    match descriptor.kind:
        case QueryKind.ALL:
            return True
        case QueryKind.BY_AREA_MANAGER_IN:
            return observation.area_manager in descriptor.area_managers
        case QueryKind.BY_OBSERVER_ID:
            return observation.observer.id == descriptor.observer_id
        case QueryKind.BY_ACTION_ASSIGNEE:
            return observation.action_assignee_id == descriptor.assignee_id
        case _:
            raise ValueError(f"Unsupported query kind: {descriptor.kind!r}")
