"""System clock implementation of TimeAuthorityProtocol."""

from datetime import datetime, timezone, tzinfo

from sbo_core.application.ports.time_authority import TimeAuthorityProtocol


class SystemTimeAuthority(TimeAuthorityProtocol):
    """Time authority backed by the host clock.

    Attributes:
        _tz: Timezone for now(). Defaults to the host's local timezone so
            calendar metrics follow wall-clock local fields.
    """

    def __init__(self, tz: tzinfo | None = None) -> None:
        self._tz = tz

    def now(self) -> datetime:
        if self._tz is None:
            return datetime.now(timezone.utc).astimezone()
        return datetime.now(self._tz)

    def utcnow(self) -> datetime:
        return datetime.now(timezone.utc)
