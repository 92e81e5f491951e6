"""The task-automation contract."""

from sorotask.contract.contract import TaskContract
from sorotask.contract.dispatch import CHECK_CONDITION, execute_task, is_ready
from sorotask.contract.registration import register_task, validate_interval

__all__ = [
    "TaskContract",
    "register_task",
    "validate_interval",
    "execute_task",
    "is_ready",
    "CHECK_CONDITION",
]
