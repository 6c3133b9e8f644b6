"""Domain services for SBO Core.

Domain services contain logic that doesn't naturally fit in entities or
value objects. They must NOT depend on infrastructure.

Available services:
- observation_aggregation: Pure dashboard metric functions
"""

from sbo_core.domain.services import observation_aggregation

__all__ = ["observation_aggregation"]
