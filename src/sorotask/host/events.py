"""Contract events and an in-memory event log.

Events are the contract's only outbound notification channel; external
indexers (such as the keeper's TaskIndex) read them to discover tasks.

Usage:
    log = EventLog()
    env = Env(events=log, ...)
    ...
    new_events, cursor = log.since(cursor)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

TASK_REGISTERED = "TaskRegistered"


@dataclass(frozen=True, slots=True)
class ContractEvent:
    """A committed contract event.

    Attributes:
        topics: Indexed topics; the first is the event name.
        data: Event payload.
        timestamp: Ledger timestamp of the operation that emitted it.

    Example:
        ContractEvent(topics=("TaskRegistered", 1), data=creator, timestamp=1704067200)
    """

    topics: tuple[Any, ...]
    data: Any
    timestamp: int

    @property
    def name(self) -> str:
        return str(self.topics[0]) if self.topics else ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary (payload values are left as-is)."""
        return {
            "topics": list(self.topics),
            "data": self.data,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ContractEvent:
        """Create from dictionary (inverse of to_dict)."""
        return cls(
            topics=tuple(data["topics"]),
            data=data.get("data"),
            timestamp=data["timestamp"],
        )


class EventLog:
    """Append-only in-memory event sink with cursor-based reads."""

    def __init__(self) -> None:
        self._events: list[ContractEvent] = []
        self._dropped = 0

    def publish(self, event: ContractEvent) -> None:
        self._events.append(event)

    @property
    def events(self) -> list[ContractEvent]:
        return list(self._events)

    def since(self, cursor: int = 0) -> tuple[list[ContractEvent], int]:
        """Get events appended at or after ``cursor``.

        Cursors count every event ever published, so they stay valid across
        ``clear()``.

        Returns:
            The new events and the cursor to pass next time.
        """
        start = max(cursor - self._dropped, 0)
        return self._events[start:], self._dropped + len(self._events)

    def by_name(self, name: str) -> list[ContractEvent]:
        return [e for e in self._events if e.name == name]

    def __len__(self) -> int:
        return len(self._events)

    def clear(self) -> None:
        """Drop all events; existing cursors see only events published later."""
        self._dropped += len(self._events)
        self._events.clear()
