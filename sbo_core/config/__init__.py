"""Configuration module for SBO Core.

Available Configurations:
- WorkflowConfig: Dashboard targets, metric windows, timeouts, concurrency
"""

from sbo_core.config.workflow_config import (
    DEFAULT_WORKFLOW_CONFIG,
    TEST_WORKFLOW_CONFIG,
    WorkflowConfig,
)

__all__ = [
    "WorkflowConfig",
    "DEFAULT_WORKFLOW_CONFIG",
    "TEST_WORKFLOW_CONFIG",
]
