"""Typed storage keys.

Task records and the ID counter share one key space; the key classes keep
them disjoint without string prefixes.

Usage:
    storage.set(CounterKey(), 3)
    storage.set(TaskKey(3), config)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class TaskKey:
    """Key of a single task record."""

    task_id: int

    def encode(self) -> str:
        return f"task:{self.task_id}"


@dataclass(frozen=True, slots=True)
class CounterKey:
    """Key of the ID counter (next unused ID minus one)."""

    def encode(self) -> str:
        return "counter"


DataKey: TypeAlias = TaskKey | CounterKey


def decode_key(raw: str) -> DataKey:
    """Inverse of ``DataKey.encode`` for backends that store text keys.

    Raises:
        ValueError: If ``raw`` is not a known key encoding.
    """
    if raw == "counter":
        return CounterKey()
    kind, _, value = raw.partition(":")
    if kind == "task" and value.isdigit():
        return TaskKey(int(value))
    raise ValueError(f"Unknown storage key: {raw!r}")
