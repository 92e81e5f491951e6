"""Advisory gas-balance monitoring.

The contract never debits ``gas_balance``; the keeper only reads it to avoid
spending effort on tasks whose owners have not funded them.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class GasMonitor:
    """Flags low and exhausted gas balances.

    Args:
        warn_threshold: Balances below this (and above 0) count as low.
    """

    def __init__(self, warn_threshold: int = 500) -> None:
        self.warn_threshold = warn_threshold
        self._low_gas_tasks: set[int] = set()

    def check_gas_balance(self, task_id: int, gas_balance: int) -> bool:
        """Record the task's balance and decide whether to skip it.

        Returns:
            True if the task should be skipped (balance <= 0).
        """
        if 0 < gas_balance < self.warn_threshold:
            self._low_gas_tasks.add(task_id)
        else:
            self._low_gas_tasks.discard(task_id)

        if gas_balance <= 0:
            logger.error(
                "Task %s has critically low gas balance (%s). Skipping execution.",
                task_id,
                gas_balance,
            )
            return True
        if gas_balance < self.warn_threshold:
            logger.warning(
                "Task %s has low gas balance (%s). Threshold: %s",
                task_id,
                gas_balance,
                self.warn_threshold,
            )
        return False

    @property
    def low_gas_count(self) -> int:
        """Number of tasks currently below the warning threshold."""
        return len(self._low_gas_tasks)

    def low_gas_tasks(self) -> list[int]:
        return sorted(self._low_gas_tasks)
