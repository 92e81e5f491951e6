"""Keeper: off-ledger trigger that executes tasks when they fall due.

The keeper only uses the contract's public interface (get_task, execute)
and its events, exactly like any external relayer would.

Usage:
    keeper = Keeper(contract, KeeperSettings())
    await keeper.run_cycle()       # one poll + execute pass
    await keeper.run(max_cycles=10)
"""

from __future__ import annotations

import asyncio
import logging
import time

from sorotask.config import KeeperSettings
from sorotask.contract import TaskContract
from sorotask.host.events import EventLog
from sorotask.keeper.gas import GasMonitor
from sorotask.keeper.index import TaskIndex
from sorotask.keeper.metrics import KeeperMetrics
from sorotask.keeper.models import CycleStats, RetryPolicy
from sorotask.keeper.poller import TaskPoller
from sorotask.keeper.queue import ExecutionQueue
from sorotask.keeper.retry import call_with_retry

logger = logging.getLogger(__name__)


class Keeper:
    """Polls known tasks, executes the due ones with retry, keeps metrics.

    Args:
        contract: Contract to read and trigger.
        settings: Keeper configuration (default: KeeperSettings()).
        index: Known task IDs (default: empty, fed from events).
        events: Event log to discover new tasks from. Defaults to the
            contract env's sink when that is an EventLog.
    """

    def __init__(
        self,
        contract: TaskContract,
        settings: KeeperSettings | None = None,
        *,
        index: TaskIndex | None = None,
        events: EventLog | None = None,
    ) -> None:
        self._contract = contract
        self._settings = settings or KeeperSettings()
        self.index = index if index is not None else TaskIndex()
        if events is None and isinstance(contract.env.events, EventLog):
            events = contract.env.events
        self._events = events

        self.gas_monitor = GasMonitor(self._settings.gas_warn_threshold)
        self.poller = TaskPoller(
            contract.get_task,
            contract.env.clock,
            gas_monitor=self.gas_monitor,
            max_concurrent_reads=self._settings.max_concurrent_reads,
        )
        self.queue = ExecutionQueue(self._settings.max_concurrent_executions)
        self.metrics = KeeperMetrics()
        self.retry_policy = RetryPolicy.from_settings(self._settings)
        self._stopped = False

    async def run_cycle(self) -> CycleStats:
        """Discover tasks, poll them, execute the due ones."""
        start = time.monotonic()
        if self._events is not None:
            self.index.sync(self._events)

        due = await self.poller.poll_due_tasks(self.index.task_ids())
        poll_stats = self.poller.stats
        self.metrics.increment("tasks_checked_total", poll_stats.tasks_checked)
        self.metrics.increment("tasks_due_total", poll_stats.tasks_due)

        cycle = await self.queue.enqueue(due, self.execute_task)
        self.metrics.increment("tasks_executed_total", len(cycle.completed))
        self.metrics.increment("tasks_failed_total", len(cycle.failed))
        self.metrics.record("low_gas_tasks", self.gas_monitor.low_gas_count)
        self.metrics.record("last_cycle_duration_ms", (time.monotonic() - start) * 1000)
        return cycle

    async def execute_task(self, task_id: int) -> None:
        """Submit ``execute(task_id)`` with the configured retry policy."""

        async def submit() -> None:
            await asyncio.to_thread(self._contract.execute, task_id)

        def exhausted(error: BaseException) -> None:
            logger.error(
                "Task %s gave up after %d retries: %s",
                task_id,
                self.retry_policy.max_retries,
                error,
            )

        await call_with_retry(submit, policy=self.retry_policy, on_exhausted=exhausted)

    async def run(self, max_cycles: int | None = None) -> None:
        """Run cycles every ``polling_interval`` seconds until stopped.

        Args:
            max_cycles: Stop after this many cycles (None = until stop()).
        """
        self._stopped = False
        cycles = 0
        logger.info("Keeper started, polling every %.1fs", self._settings.polling_interval)
        while not self._stopped and (max_cycles is None or cycles < max_cycles):
            try:
                await self.run_cycle()
            except Exception:
                logger.exception("Keeper cycle failed")
            cycles += 1
            if self._stopped or (max_cycles is not None and cycles >= max_cycles):
                break
            await asyncio.sleep(self._settings.polling_interval)
        await self.queue.drain()
        logger.info("Keeper stopped after %d cycle(s)", cycles)

    def stop(self) -> None:
        """Ask ``run`` to exit after the current cycle."""
        self._stopped = True
