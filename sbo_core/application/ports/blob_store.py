"""Blob store port for observation images."""

from __future__ import annotations

from typing import Protocol


class BlobStoreProtocol(Protocol):
    """Protocol for uploading observation images.

    Implementations may use object storage, a CDN or in-memory storage.
    """

    async def upload(self, payload: bytes | str, owner_id: str) -> str:
        """Upload an encoded image.

        Args:
            payload: Raw bytes or a data URL.
            owner_id: Identity the image belongs to.

        Returns:
            A URL for the stored image.

        Raises:
            StorageError: On quota or permission failure.
            TransientIOError: If the store is unreachable.
        """
        ...
