"""Storage backends and the task registry."""

from sorotask.storage.keys import CounterKey, DataKey, TaskKey
from sorotask.storage.local import LocalStorage
from sorotask.storage.protocol import Storage
from sorotask.storage.registry import TaskRegistry
from sorotask.storage.sqlite import SQLiteStorage

__all__ = [
    "Storage",
    "LocalStorage",
    "SQLiteStorage",
    "TaskRegistry",
    "DataKey",
    "TaskKey",
    "CounterKey",
]
