"""
Pytest configuration and shared fixtures for SBO Core tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for async function mocking
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

import pytest

from sbo_core.domain.models.identity import Identity, Role
from sbo_core.infrastructure.cache.offline_cache import InMemoryOfflineCache
from sbo_core.infrastructure.stubs import (
    BlobStoreStub,
    DirectoryStub,
    NotificationPublisherStub,
    ObservationRepositoryStub,
)
from tests.helpers import FakeTimeAuthority, make_identity


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from sbo_core import __version__

    return __version__


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    """Time frozen at 2026-03-15T12:00:00 UTC."""
    return FakeTimeAuthority()


@pytest.fixture
def observer() -> Identity:
    return make_identity("u-ada", "Ada Obi", Role.OBSERVER, "Production")


@pytest.fixture
def second_observer() -> Identity:
    return make_identity("u-bayo", "Bayo Ade", Role.OBSERVER, "Engineering")


@pytest.fixture
def manager() -> Identity:
    """Manager whose display name is a recognized area manager."""
    return make_identity("u-john", "John Doe", Role.MANAGER, "Production")


@pytest.fixture
def hse() -> Identity:
    return make_identity("u-hse", "Grace Eze", Role.HSE, "Safety")


@pytest.fixture
def directory(
    observer: Identity,
    second_observer: Identity,
    manager: Identity,
    hse: Identity,
) -> DirectoryStub:
    return DirectoryStub([observer, second_observer, manager, hse])


@pytest.fixture
def repository() -> ObservationRepositoryStub:
    """Create a fresh observation repository stub."""
    return ObservationRepositoryStub()


@pytest.fixture
def blob_store() -> BlobStoreStub:
    return BlobStoreStub()


@pytest.fixture
def publisher() -> NotificationPublisherStub:
    return NotificationPublisherStub()


@pytest.fixture
def offline_cache() -> InMemoryOfflineCache:
    return InMemoryOfflineCache()
