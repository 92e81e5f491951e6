"""Polling engine: decides which tasks are due for execution.

A task is due when ``last_run + interval <= now`` (ledger time). This is the
interval gate the contract itself does not apply.

Usage:
    poller = TaskPoller(contract.get_task, env.clock, max_concurrent_reads=10)
    due = await poller.poll_due_tasks(index.task_ids())
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import time
from collections.abc import Callable, Iterable

from sorotask.core.task import TaskConfig
from sorotask.host.protocol import LedgerClock
from sorotask.keeper.gas import GasMonitor
from sorotask.keeper.models import PollOutcome, PollResult, PollStats

logger = logging.getLogger(__name__)

TaskReader = Callable[[int], TaskConfig | None]


class TaskPoller:
    """Reads tasks concurrently and selects the due ones.

    Reads run in worker threads, at most ``max_concurrent_reads`` at a time.
    A failed read is counted and logged; it never aborts the cycle.

    Args:
        read_task: View call returning a task's config or None.
        clock: Ledger time source.
        gas_monitor: Skips tasks with exhausted gas (default: threshold 500).
        max_concurrent_reads: Concurrency limit for reads.
    """

    def __init__(
        self,
        read_task: TaskReader,
        clock: LedgerClock,
        *,
        gas_monitor: GasMonitor | None = None,
        max_concurrent_reads: int = 10,
    ) -> None:
        if max_concurrent_reads < 1:
            raise ValueError(f"max_concurrent_reads must be >= 1, got {max_concurrent_reads}")
        self._read_task = read_task
        self._clock = clock
        self._gas_monitor = gas_monitor or GasMonitor()
        self._max_concurrent_reads = max_concurrent_reads
        self._stats = PollStats()

    @property
    def stats(self) -> PollStats:
        """Copy of the statistics of the most recent poll."""
        return dataclasses.replace(self._stats)

    async def poll_due_tasks(self, task_ids: Iterable[int]) -> list[int]:
        """Check every task and return the IDs that are due, in input order."""
        ids = list(task_ids)
        self._stats = PollStats(last_poll_time=time.time())
        if not ids:
            logger.debug("No tasks to check")
            return []

        start = time.monotonic()
        now = self._clock.timestamp()
        semaphore = asyncio.Semaphore(self._max_concurrent_reads)

        async def limited_check(task_id: int) -> PollResult:
            async with semaphore:
                return await self.check_task(task_id, now)

        results = await asyncio.gather(
            *(limited_check(task_id) for task_id in ids), return_exceptions=True
        )

        due: list[int] = []
        for task_id, result in zip(ids, results, strict=True):
            if isinstance(result, BaseException):
                self._stats.errors += 1
                logger.error("Error checking task %s: %s", task_id, result)
                continue
            self._stats.tasks_checked += 1
            if result.is_due:
                due.append(task_id)
                self._stats.tasks_due += 1
            elif result.outcome is PollOutcome.SKIPPED:
                self._stats.tasks_skipped += 1

        logger.info(
            "Poll complete in %.0fms | Checked: %d | Due: %d | Skipped: %d | Errors: %d",
            (time.monotonic() - start) * 1000,
            self._stats.tasks_checked,
            self._stats.tasks_due,
            self._stats.tasks_skipped,
            self._stats.errors,
        )
        return due

    async def check_task(self, task_id: int, now: int) -> PollResult:
        """Decide whether one task is due at ledger time ``now``."""
        config = await asyncio.to_thread(self._read_task, task_id)
        if config is None:
            logger.warning("Task %s not found", task_id)
            return PollResult(task_id, PollOutcome.NOT_FOUND)

        if self._gas_monitor.check_gas_balance(task_id, config.gas_balance):
            return PollResult(task_id, PollOutcome.SKIPPED)

        next_due = config.next_due()
        if next_due > now:
            return PollResult(task_id, PollOutcome.NOT_DUE, next_due)

        logger.info(
            "Task %s is DUE (last_run: %s, interval: %s, next_run: %s, current: %s)",
            task_id,
            config.last_run,
            config.interval,
            next_due,
            now,
        )
        return PollResult(task_id, PollOutcome.DUE, next_due)
