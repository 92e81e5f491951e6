"""Local in-memory storage implementation.

Simple dict-based storage suitable for single-process use and testing.

Usage:
    storage = LocalStorage()
    registry = TaskRegistry(storage)
"""

from __future__ import annotations

import copy as cp
import pickle  # nosec B403 - Used only for local snapshots, not untrusted input
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sorotask.storage.keys import DataKey


class LocalStorage:
    """In-memory storage using a single dict.

    Values are deep-copied on read so callers cannot mutate stored state
    without going through ``set``.
    """

    def __init__(self) -> None:
        self._data: dict[DataKey, Any] = {}

    def get(self, key: DataKey, default: Any = None, copy: bool = True) -> Any:
        """Get value for key.

        Args:
            key: Key to read.
            default: Returned when the key is absent.
            copy: Whether to return a deep copy (default True).

        Returns:
            Stored value, or ``default``.
        """
        if key not in self._data:
            return default
        value = self._data[key]
        return cp.deepcopy(value) if copy else value

    def set(self, key: DataKey, value: Any) -> None:
        """Store a deep copy of ``value``; later changes by the caller are not seen."""
        self._data[key] = cp.deepcopy(value)

    def has(self, key: DataKey) -> bool:
        return key in self._data

    def keys(self) -> Iterator[DataKey]:
        """Iterate stored keys."""
        yield from list(self._data)

    def __len__(self) -> int:
        return len(self._data)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Restore the pre-transaction state if the block raises.

        Stored values are never mutated in place (reads are copies), so a
        shallow copy of the mapping is enough to roll back.
        """
        saved = dict(self._data)
        try:
            yield
        except BaseException:
            self._data = saved
            raise

    def close(self) -> None:
        """No resources to release."""
        return

    def snapshot(self) -> bytes:
        """Pickle entire state for serialization.

        Returns:
            Pickled bytes of storage state.
        """
        return pickle.dumps(self._data)

    def restore(self, data: bytes) -> None:
        """Restore from pickle snapshot.

        Args:
            data: Pickled bytes from previous snapshot() call.
        """
        self._data = pickle.loads(data)  # nosec B301 - Only restores our own snapshots
