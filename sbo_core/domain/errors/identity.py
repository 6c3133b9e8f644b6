"""Identity errors."""

from __future__ import annotations

from sbo_core.domain.exceptions import SBOError


class UnknownRoleError(SBOError):
    """Raised when an identity carries a role outside the closed set.

    Fatal for visibility computation: no query is built for such an
    identity.

    Attributes:
        role: The unrecognized role value.
    """

    def __init__(self, role: object) -> None:
        """Initialize the error.

        Args:
            role: The unrecognized role value.
        """
        self.role = role
        super().__init__(f"Unknown role: {role!r}")
