"""Test helpers for SBO Core."""

from tests.helpers.fake_time_authority import FakeTimeAuthority
from tests.helpers.factories import make_identity, make_observation

__all__ = ["FakeTimeAuthority", "make_identity", "make_observation"]
