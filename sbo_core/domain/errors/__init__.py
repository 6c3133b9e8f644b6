"""Domain errors for SBO Core.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from SBOError.
"""

from sbo_core.domain.errors.identity import UnknownRoleError
from sbo_core.domain.errors.io import StorageError, TransientIOError
from sbo_core.domain.errors.observation import (
    ConcurrentModificationError,
    NotFoundError,
    ObservationError,
    PreconditionError,
    ValidationError,
)

__all__: list[str] = [
    "ConcurrentModificationError",
    "NotFoundError",
    "ObservationError",
    "PreconditionError",
    "StorageError",
    "TransientIOError",
    "UnknownRoleError",
    "ValidationError",
]
