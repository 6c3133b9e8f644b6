"""Directory port.

The Directory is the read-only registry of known identities. It replaces
any global identity table: services receive it by injection.
"""

from __future__ import annotations

from typing import Protocol

from sbo_core.domain.models.identity import Identity


class DirectoryProtocol(Protocol):
    """Protocol for identity lookups.

    Methods:
        get: Look up an identity by id
        list_all: List every known identity
    """

    def get(self, identity_id: str) -> Identity | None:
        """Look up an identity by id.

        Returns:
            The identity if known, None otherwise.
        """
        ...

    def list_all(self) -> list[Identity]:
        """List every known identity in registry order."""
        ...
