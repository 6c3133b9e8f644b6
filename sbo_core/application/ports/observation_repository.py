"""Observation repository port.

This module defines the abstract interface for observation storage. Any
document store that satisfies it is compliant; the engine never holds
the authoritative copy and treats every read as a fresh snapshot.

Rules for implementations:
1. FAIL LOUD - Raise TransientIOError when the store is unreachable
2. ONE WRITE PER CALL - Each method is a single atomic write or read
3. VERSION ON WRITE - Every successful write increments ``version``
4. COMMENTS APPEND ONLY - Comments are added only via append_comment
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from sbo_core.domain.models.observation import Comment, Observation, ObservationStatus
from sbo_core.domain.models.query import QueryDescriptor


class ObservationRepositoryProtocol(Protocol):
    """Protocol for observation storage operations.

    Methods:
        create: Store a new observation and assign its id
        get: Retrieve an observation by id
        query: List observations matching a QueryDescriptor
        update: Merge field changes into a stored observation
        append_comment: Append a comment and set the status in one write
    """

    async def create(self, observation: Observation) -> str:
        """Store a new observation.

        Args:
            observation: The observation to store. Its id must be None.
                The stored copy carries the new id and version 1.

        Returns:
            The identifier assigned by the store.

        Raises:
            TransientIOError: If the store is unreachable.
        """
        ...

    async def get(self, observation_id: str) -> Observation | None:
        """Retrieve an observation by id.

        Returns:
            The observation if found, None otherwise.

        Raises:
            TransientIOError: If the store is unreachable.
        """
        ...

    async def query(self, descriptor: QueryDescriptor) -> list[Observation]:
        """List observations matching the descriptor.

        Results are ordered by created_at descending.

        Raises:
            TransientIOError: If the store is unreachable.
        """
        ...

    async def update(
        self,
        observation_id: str,
        changes: Mapping[str, Any],
        expected_version: int | None = None,
    ) -> Observation:
        """Merge field changes into a stored observation.

        Args:
            observation_id: The observation to update.
            changes: Field name to new value.
            expected_version: If given, the write only succeeds when the
                stored version still matches.

        Returns:
            The observation as stored after the merge.

        Raises:
            NotFoundError: If the observation doesn't exist.
            ConcurrentModificationError: If expected_version is stale.
            TransientIOError: If the store is unreachable.
        """
        ...

    async def append_comment(
        self,
        observation_id: str,
        comment: Comment,
        status: ObservationStatus,
    ) -> Observation:
        """Append a comment and set the status in a single write.

        Appends are sequenced by the store so concurrent commenters never
        lose each other's entries.

        Returns:
            The observation as stored after the append.

        Raises:
            NotFoundError: If the observation doesn't exist.
            TransientIOError: If the store is unreachable.
        """
        ...
