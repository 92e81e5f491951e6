"""Task records."""

from sorotask.core.task.models import TaskConfig

__all__ = [
    "TaskConfig",
]
