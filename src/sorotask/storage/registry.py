"""Task registry service.

TaskRegistry is the only shared mutable state of the contract: a durable
mapping from task ID to TaskConfig plus the monotonic ID counter.
"""

from __future__ import annotations

from collections.abc import Iterator

from sorotask.core.task import TaskConfig
from sorotask.storage.keys import CounterKey, TaskKey
from sorotask.storage.protocol import Storage


class TaskRegistry:
    """Allocates task IDs and stores task records.

    IDs come from a single persisted counter starting at 1. There is no
    deallocation: IDs are never reused and records are never deleted.

    Args:
        storage: Backend holding the counter and the records.
    """

    def __init__(self, storage: Storage):
        self._storage = storage

    @property
    def storage(self) -> Storage:
        return self._storage

    def allocate_id(self) -> int:
        """Allocate the next unused task ID.

        Reads the counter (0 when absent), increments it and persists the new
        value before returning it, so the sequence survives restarts of a
        durable backend.

        Returns:
            Newly allocated task ID.
        """
        counter = int(self._storage.get(CounterKey(), 0)) + 1
        self._storage.set(CounterKey(), counter)
        return counter

    def put(self, task_id: int, config: TaskConfig) -> None:
        """Store or overwrite the record for ``task_id``."""
        self._storage.set(TaskKey(task_id), config)

    def get(self, task_id: int) -> TaskConfig | None:
        """Get the record for ``task_id``, or None. Total over all IDs."""
        return self._storage.get(TaskKey(task_id))

    def count(self) -> int:
        """Number of IDs allocated so far (the current counter value)."""
        return int(self._storage.get(CounterKey(), 0))

    def task_ids(self) -> Iterator[int]:
        """Iterate every allocated ID in ascending order."""
        yield from range(1, self.count() + 1)
