"""Contract error taxonomy.

Every failure the contract surfaces derives from ContractError and carries a
stable numeric code, so callers outside Python can match on it.
"""

from __future__ import annotations

from enum import IntEnum


class ErrorCode(IntEnum):
    """Stable error codes exposed at the contract boundary."""

    INVALID_INTERVAL = 1
    TASK_NOT_FOUND = 2
    UNAUTHORIZED = 3
    INVOCATION_FAILED = 4
    REENTRANCY = 5


class ContractError(Exception):
    """Base class for errors that abort a contract operation."""

    code: ErrorCode

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.__class__.__name__)


class InvalidInterval(ContractError):
    """Raised when a task is registered with a non-positive interval."""

    code = ErrorCode.INVALID_INTERVAL

    def __init__(self, interval: object) -> None:
        super().__init__(f"Task interval must be a positive integer, got {interval!r}")
        self.interval = interval


class TaskNotFound(ContractError):
    """Raised when executing a task ID that was never registered."""

    code = ErrorCode.TASK_NOT_FOUND

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class AuthorizationError(ContractError):
    """Raised when an address has not authorized the current operation."""

    code = ErrorCode.UNAUTHORIZED

    def __init__(self, address: object) -> None:
        super().__init__(f"Address {address} has not authorized this operation")
        self.address = address


class InvocationError(ContractError):
    """Raised when a cross-contract call fails.

    The callee's own exception, if any, is chained as ``__cause__``.
    """

    code = ErrorCode.INVOCATION_FAILED

    def __init__(self, address: object, selector: str, reason: str) -> None:
        super().__init__(f"Call {address}.{selector} failed: {reason}")
        self.address = address
        self.selector = selector


class ReentrancyError(ContractError):
    """Raised when a nested call re-enters a running contract operation."""

    code = ErrorCode.REENTRANCY
