"""Collaborator I/O errors.

Raised by repository and blob-store adapters (or by the timeout guard in
the services) when an external collaborator cannot complete a call.
"""

from __future__ import annotations

from sbo_core.domain.exceptions import SBOError


class TransientIOError(SBOError):
    """Raised when a collaborator is unreachable or exceeds its timeout.

    Reads degrade to the offline cache on this error; writes always
    propagate it to the caller, who owns any retry policy.

    Attributes:
        collaborator: Name of the collaborator that failed.
        operation: The call that failed.
    """

    def __init__(self, collaborator: str, operation: str, detail: str = "") -> None:
        """Initialize the error.

        Args:
            collaborator: Name of the collaborator that failed.
            operation: The call that failed.
            detail: Optional underlying cause.
        """
        self.collaborator = collaborator
        self.operation = operation
        suffix = f": {detail}" if detail else ""
        super().__init__(f"{collaborator} unavailable during {operation}{suffix}")


class StorageError(SBOError):
    """Raised when the blob store refuses an upload (quota or permission).

    Attributes:
        owner_id: The identity the upload was made for.
    """

    def __init__(
        self,
        owner_id: str,
        message: str = "Failed to upload image. Please check your storage quota or permissions.",
    ) -> None:
        """Initialize the error.

        Args:
            owner_id: The identity the upload was made for.
            message: Guidance shown to the caller.
        """
        self.owner_id = owner_id
        super().__init__(message)
