"""Off-ledger keeper: polls tasks and triggers execute when they are due.

Usage:
    from sorotask.keeper import Keeper

    keeper = Keeper(contract, KeeperSettings(polling_interval=5.0))
    await keeper.run()
"""

from sorotask.keeper.gas import GasMonitor
from sorotask.keeper.index import TaskIndex
from sorotask.keeper.keeper import Keeper
from sorotask.keeper.metrics import KeeperMetrics
from sorotask.keeper.models import CycleStats, PollOutcome, PollResult, PollStats, RetryPolicy
from sorotask.keeper.poller import TaskPoller
from sorotask.keeper.queue import ExecutionQueue
from sorotask.keeper.retry import (
    build_retryer,
    call_with_retry,
    is_duplicate_error,
    is_retryable_error,
)

__all__ = [
    "Keeper",
    "TaskIndex",
    "TaskPoller",
    "GasMonitor",
    "ExecutionQueue",
    "KeeperMetrics",
    # Models
    "PollOutcome",
    "PollResult",
    "PollStats",
    "CycleStats",
    "RetryPolicy",
    # Retry
    "build_retryer",
    "call_with_retry",
    "is_duplicate_error",
    "is_retryable_error",
]
