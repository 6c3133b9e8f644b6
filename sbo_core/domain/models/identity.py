"""Identity domain model.

An Identity is a known person in the Directory. Identities are immutable
once created; the Directory owns them and the engine only reads them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from sbo_core.domain.errors.identity import UnknownRoleError


class Role(StrEnum):
    """Closed set of roles an identity can hold.

    Roles:
        OBSERVER: Field personnel who submit observations.
        MANAGER: Area manager who reviews and remediates routed observations.
        HSE: Oversight role with unrestricted read access.
    """

    OBSERVER = "observer"
    MANAGER = "manager"
    HSE = "hse"

    @classmethod
    def parse(cls, value: object) -> Role:
        """Convert a raw role value into a Role.

        Args:
            value: A Role or its string value.

        Returns:
            The matching Role.

        Raises:
            UnknownRoleError: If the value is outside the closed set.
        """
        if isinstance(value, Role):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as e:
            raise UnknownRoleError(value) from e


@dataclass(frozen=True, eq=True)
class Identity:
    """A known person and the role they act under.

    Attributes:
        id: Stable identity identifier.
        display_name: Name shown on records and leaderboards.
        department: Organisational department, free text from the directory.
        role: The identity's role.
    """

    id: str
    display_name: str
    department: str
    role: Role

    def __post_init__(self) -> None:
        """Validate identity fields."""
        if not self.id:
            raise ValueError("Identity id must not be empty")
        # Accept raw role strings from directory payloads
        if not isinstance(self.role, Role):
            object.__setattr__(self, "role", Role.parse(self.role))
