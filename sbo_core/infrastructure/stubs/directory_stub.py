"""Directory stub implementation.

A fixed, injected registry of identities. Lookups are by id; listing
preserves registration order.
"""

from __future__ import annotations

from collections.abc import Iterable

from sbo_core.application.ports.directory import DirectoryProtocol
from sbo_core.domain.models.identity import Identity


class DirectoryStub(DirectoryProtocol):
    """In-memory implementation of DirectoryProtocol.

    Attributes:
        _identities: Identity id to Identity, in registration order.
    """

    def __init__(self, identities: Iterable[Identity] = ()) -> None:
        """Initialize the directory.

        Args:
            identities: Identities to register.

        Raises:
            ValueError: If two identities share an id.
        """
        self._identities: dict[str, Identity] = {}
        for identity in identities:
            self.register(identity)

    def get(self, identity_id: str) -> Identity | None:
        return self._identities.get(identity_id)

    def list_all(self) -> list[Identity]:
        return list(self._identities.values())

    def register(self, identity: Identity) -> None:
        """Add an identity.

        Raises:
            ValueError: If the id is already registered.
        """
        if identity.id in self._identities:
            raise ValueError(f"Identity already registered: {identity.id}")
        self._identities[identity.id] = identity

    def replace(self, identity: Identity) -> None:
        """Swap in a changed identity under an existing id (testing)."""
        if identity.id not in self._identities:
            raise KeyError(f"Identity not registered: {identity.id}")
        self._identities[identity.id] = identity
