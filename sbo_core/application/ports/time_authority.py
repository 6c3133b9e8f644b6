"""Port for reading the clock.

Timestamps on observations and the calendar buckets of the dashboard
(current month, year to date, rolling windows) are taken from an
injected clock rather than ``datetime.now()``, so a test or a replay
can pin the reference instant.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Source of the current instant for services."""

    @abstractmethod
    def now(self) -> datetime:
        """Timezone-aware local time.

        Calendar fields on new observations and the month/year boundaries
        used by metrics follow this value's timezone.
        """
        ...

    @abstractmethod
    def utcnow(self) -> datetime:
        """The same instant in UTC."""
        ...
