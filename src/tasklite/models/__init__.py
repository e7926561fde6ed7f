"""TaskLite domain models.

Pydantic models for the entities exchanged with the TaskLite API, plus the
configuration models persisted by the config service.
"""

from .config_models import APIConfig, AppConfig, UIConfig
from .core import (
    BOARD_COLUMNS,
    Priority,
    Project,
    Task,
    TaskStatus,
    Toast,
    ToastSeverity,
    User,
)

__all__ = [
    # Entity models
    "User",
    "Project",
    "Task",
    "TaskStatus",
    "Priority",
    "BOARD_COLUMNS",
    # Notifications
    "Toast",
    "ToastSeverity",
    # Config models
    "AppConfig",
    "APIConfig",
    "UIConfig",
]
