"""Bounded-concurrency execution queue.

Usage:
    queue = ExecutionQueue(concurrency=3)
    stats = await queue.enqueue(due_ids, execute_one)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from sorotask.keeper.models import CycleStats

logger = logging.getLogger(__name__)


class ExecutionQueue:
    """Runs task executions with at most ``concurrency`` in flight.

    A task whose execution fails is remembered and left out of later cycles
    until ``reset_failed`` is called, so one broken target cannot eat every
    cycle's retry budget.

    Args:
        concurrency: Max concurrent executions.
    """

    def __init__(self, concurrency: int = 3) -> None:
        if concurrency < 1:
            raise ValueError(f"concurrency must be >= 1, got {concurrency}")
        self.concurrency = concurrency
        self.in_flight = 0
        self._failed_tasks: set[int] = set()

    @property
    def failed_tasks(self) -> frozenset[int]:
        return frozenset(self._failed_tasks)

    def reset_failed(self, task_id: int | None = None) -> None:
        """Allow a failed task (or all of them) back into the queue."""
        if task_id is None:
            self._failed_tasks.clear()
        else:
            self._failed_tasks.discard(task_id)

    async def enqueue(
        self,
        task_ids: Iterable[int],
        executor: Callable[[int], Awaitable[Any]],
    ) -> CycleStats:
        """Execute one cycle and wait for it to finish.

        Args:
            task_ids: Tasks to run this cycle.
            executor: Coroutine function running a single task.

        Returns:
            Which tasks completed and which failed.
        """
        ids = list(task_ids)
        runnable = [task_id for task_id in ids if task_id not in self._failed_tasks]
        stats = CycleStats(queued=len(runnable), excluded=len(ids) - len(runnable))
        semaphore = asyncio.Semaphore(self.concurrency)

        async def run(task_id: int) -> None:
            async with semaphore:
                self.in_flight += 1
                logger.debug("Task %s started", task_id)
                try:
                    await executor(task_id)
                except Exception as e:
                    self._failed_tasks.add(task_id)
                    stats.failed.append(task_id)
                    logger.error("Task %s failed: %s", task_id, e)
                else:
                    stats.completed.append(task_id)
                    logger.debug("Task %s succeeded", task_id)
                finally:
                    self.in_flight -= 1

        await asyncio.gather(*(run(task_id) for task_id in runnable))

        logger.info(
            "Execution cycle complete | Queued: %d | Completed: %d | Failed: %d | Excluded: %d",
            stats.queued,
            len(stats.completed),
            len(stats.failed),
            stats.excluded,
        )
        return stats

    async def drain(self, poll: float = 0.05) -> None:
        """Wait until no execution is in flight."""
        while self.in_flight > 0:
            await asyncio.sleep(poll)
