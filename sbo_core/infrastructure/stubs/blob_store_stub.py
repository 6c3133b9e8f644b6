"""Blob store stub implementation.

Keeps uploaded images in memory and hands out ``memory://`` URLs.
Failure modes can be switched on for tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from structlog import get_logger

from sbo_core.application.ports.blob_store import BlobStoreProtocol
from sbo_core.domain.errors.io import StorageError, TransientIOError

logger = get_logger(__name__)


@dataclass
class BlobStoreStub(BlobStoreProtocol):
    """In-memory stub implementation of BlobStoreProtocol.

    Attributes:
        blobs: URL to uploaded payload.
        quota_exceeded: When True uploads fail with StorageError.
        unreachable: When True uploads fail with TransientIOError.
    """

    blobs: dict[str, bytes | str] = field(default_factory=dict)
    quota_exceeded: bool = False
    unreachable: bool = False

    async def upload(self, payload: bytes | str, owner_id: str) -> str:
        """Store the payload and return its URL.

        Raises:
            StorageError: If quota_exceeded is set.
            TransientIOError: If unreachable is set.
        """
        if self.unreachable:
            logger.warning("blob_store_unreachable", owner_id=owner_id)
            raise TransientIOError("blob_store", "upload")
        if self.quota_exceeded:
            logger.warning("blob_store_quota_exceeded", owner_id=owner_id)
            raise StorageError(owner_id)

        url = f"memory://sbo_images/{owner_id}_{len(self.blobs) + 1}.png"
        self.blobs[url] = payload
        logger.debug("blob_uploaded", url=url, owner_id=owner_id)
        return url
