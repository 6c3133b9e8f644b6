"""Observation workflow errors.

This module provides exception classes for failures raised by the
observation lifecycle: rejected drafts, unknown ids and state-machine
guard violations. All of them are reported to the caller and never
retried automatically.
"""

from __future__ import annotations

from collections.abc import Iterable

from sbo_core.domain.exceptions import SBOError


class ObservationError(SBOError):
    """Base error for observation workflow operations."""

    pass


class ValidationError(ObservationError):
    """Raised when a draft or field value violates an observation invariant.

    Raised before any write is attempted. Carries every problem found so
    the caller can show all of them at once.

    Attributes:
        errors: Human-readable guidance, one entry per problem.
    """

    def __init__(self, errors: Iterable[str]) -> None:
        """Initialize the error.

        Args:
            errors: The individual validation messages.
        """
        self.errors = list(errors)
        super().__init__("Validation failed: " + "; ".join(self.errors))


class NotFoundError(ObservationError):
    """Raised when an operation targets an unknown observation id.

    Attributes:
        observation_id: The id that was not found.
    """

    def __init__(self, observation_id: str) -> None:
        """Initialize the error.

        Args:
            observation_id: The id that was not found.
        """
        self.observation_id = observation_id
        super().__init__(f"Observation not found: {observation_id}")


class PreconditionError(ObservationError):
    """Raised when an operation violates a state-machine guard.

    Examples: assigning an action to a non-actionable observation, or to
    one that already has an assignee.

    Attributes:
        observation_id: The observation the operation targeted.
        operation: The operation that was rejected.
        reason: Why the guard failed.
    """

    def __init__(self, observation_id: str, operation: str, reason: str) -> None:
        """Initialize the error.

        Args:
            observation_id: The observation the operation targeted.
            operation: The operation that was rejected.
            reason: Why the guard failed.
        """
        self.observation_id = observation_id
        self.operation = operation
        self.reason = reason
        super().__init__(
            f"Cannot {operation} observation {observation_id}: {reason}"
        )


class ConcurrentModificationError(PreconditionError):
    """Raised when a versioned write loses a race with another writer.

    The repository rejects an update whose expected version no longer
    matches the stored one. This is recoverable: the caller should re-read
    the observation and decide whether to retry.

    Attributes:
        expected_version: The version the writer read.
        actual_version: The version currently stored.
    """

    def __init__(
        self,
        observation_id: str,
        expected_version: int,
        actual_version: int,
        operation: str = "update",
    ) -> None:
        """Initialize concurrent modification error.

        Args:
            observation_id: The observation being modified.
            expected_version: The version the writer read.
            actual_version: The version currently stored.
            operation: Description of the failed operation.
        """
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            observation_id,
            operation,
            f"expected version {expected_version} but found {actual_version}; "
            "another writer has modified this observation",
        )
