"""Storage protocol for swappable backends.

The storage layer is the ledger's durable key-value primitive, enabling:
- Local in-memory (default, tests)
- SQLite file (durable across restarts)

Usage:
    storage = LocalStorage()
    with storage.transaction():
        storage.set(CounterKey(), 1)
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Any, Protocol, runtime_checkable

from sorotask.storage.keys import DataKey


@runtime_checkable
class Storage(Protocol):
    """Abstract key-value storage. Implementations handle persistence."""

    def get(self, key: DataKey, default: Any = None) -> Any:
        """Get value for key, or ``default`` if absent. Never raises for a missing key."""
        ...

    def set(self, key: DataKey, value: Any) -> None:
        """Store or overwrite value for key."""
        ...

    def has(self, key: DataKey) -> bool:
        """Check if key is present."""
        ...

    def transaction(self) -> AbstractContextManager[None]:
        """All-or-nothing scope: writes inside are discarded if the block raises."""
        ...

    def close(self) -> None:
        """Release backend resources."""
        ...
