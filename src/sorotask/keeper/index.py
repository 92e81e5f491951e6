"""Index of task IDs known to the keeper."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sorotask.host.events import TASK_REGISTERED, EventLog

logger = logging.getLogger(__name__)


class TaskIndex:
    """Set of task IDs to poll, fed from TaskRegistered events.

    Args:
        task_ids: IDs known up front.
    """

    def __init__(self, task_ids: Iterable[int] = ()) -> None:
        self._ids: set[int] = set(task_ids)
        self._cursor = 0

    def add(self, task_id: int) -> None:
        self._ids.add(task_id)

    def remove(self, task_id: int) -> None:
        self._ids.discard(task_id)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def task_ids(self) -> list[int]:
        """Known IDs in ascending order."""
        return sorted(self._ids)

    def sync(self, log: EventLog) -> list[int]:
        """Add IDs from TaskRegistered events published since the last sync.

        Returns:
            IDs that were not known before.
        """
        events, self._cursor = log.since(self._cursor)
        added: list[int] = []
        for event in events:
            if event.name != TASK_REGISTERED or len(event.topics) < 2:
                continue
            task_id = int(event.topics[1])
            if task_id not in self._ids:
                self._ids.add(task_id)
                added.append(task_id)
        if added:
            logger.info("Indexed %d new task(s): %s", len(added), added)
        return added

    def backfill(self, task_count: int) -> None:
        """Add every ID from 1 to ``task_count`` (IDs are never reused or deleted)."""
        self._ids.update(range(1, task_count + 1))
