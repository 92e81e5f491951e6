"""Core models and errors.

Architecture Note:
    core/ holds stateless definitions only. Stateful services (storage,
    host capabilities, the contract itself) live in sibling packages.
"""

from sorotask.core.errors import (
    AuthorizationError,
    ContractError,
    ErrorCode,
    InvalidInterval,
    InvocationError,
    ReentrancyError,
    TaskNotFound,
)
from sorotask.core.identity import Address
from sorotask.core.task import TaskConfig
from sorotask.core.types import TaskId, Val

__all__ = [
    # Identity
    "Address",
    # Models
    "TaskConfig",
    "TaskId",
    "Val",
    # Errors
    "ErrorCode",
    "ContractError",
    "InvalidInterval",
    "TaskNotFound",
    "AuthorizationError",
    "InvocationError",
    "ReentrancyError",
]
