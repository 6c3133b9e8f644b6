"""
SBO Core - Safety Behavioral Observation workflow engine

Records safety observations reported by field personnel, routes them
through review and remediation, and derives supervisor dashboards
(progress against targets, completion rates, leaderboards, defaulters).

Storage, image upload, identity issuance and push delivery are external
collaborators reached through the ports in ``sbo_core.application.ports``.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
