"""Production adapters for application ports."""

from sbo_core.infrastructure.adapters.system_time_authority import SystemTimeAuthority

__all__ = ["SystemTimeAuthority"]
