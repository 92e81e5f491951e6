"""In-memory keeper metrics. Reset on process restart."""

from __future__ import annotations

from typing import Any


class KeeperMetrics:
    """Operational counters and gauges for a keeper process."""

    COUNTERS = (
        "tasks_checked_total",
        "tasks_due_total",
        "tasks_executed_total",
        "tasks_failed_total",
    )
    GAUGES = ("last_cycle_duration_ms", "low_gas_tasks")

    def __init__(self) -> None:
        self._counters: dict[str, int] = dict.fromkeys(self.COUNTERS, 0)
        self._gauges: dict[str, float] = dict.fromkeys(self.GAUGES, 0.0)

    def increment(self, key: str, amount: int = 1) -> None:
        """Increment a counter.

        Raises:
            KeyError: If ``key`` is not a known counter.
        """
        if key not in self._counters:
            raise KeyError(f"Unknown counter metric: {key}")
        self._counters[key] += amount

    def record(self, key: str, value: float) -> None:
        """Set a gauge.

        Raises:
            KeyError: If ``key`` is not a known gauge.
        """
        if key not in self._gauges:
            raise KeyError(f"Unknown gauge metric: {key}")
        self._gauges[key] = value

    def snapshot(self) -> dict[str, Any]:
        return {**self._counters, **self._gauges}

    def reset(self) -> None:
        for key in self._counters:
            self._counters[key] = 0
        for key in self._gauges:
            self._gauges[key] = 0.0
