"""Unit tests for LocalStorage.

Critical Invariants:
- Missing keys return the default, never raise
- Reads and writes are copies
- transaction() restores the previous state when the block raises
"""

import pytest

from sorotask.storage import CounterKey, LocalStorage, Storage, TaskKey


def test_local_storage_is_storage():
    assert isinstance(LocalStorage(), Storage)


def test_get_missing_key_returns_default():
    storage = LocalStorage()
    assert storage.get(TaskKey(1)) is None
    assert storage.get(CounterKey(), 0) == 0
    assert not storage.has(TaskKey(1))


def test_task_and_counter_keys_are_disjoint():
    """TaskKey(0) and CounterKey must never collide."""
    storage = LocalStorage()
    storage.set(CounterKey(), 5)
    storage.set(TaskKey(0), "task")

    assert storage.get(CounterKey()) == 5
    assert storage.get(TaskKey(0)) == "task"
    assert len(storage) == 2


def test_get_returns_copy_by_default():
    storage = LocalStorage()
    storage.set(TaskKey(1), {"args": [1]})

    value = storage.get(TaskKey(1))
    value["args"].append(2)

    assert storage.get(TaskKey(1)) == {"args": [1]}
    assert storage.get(TaskKey(1), copy=False) is storage.get(TaskKey(1), copy=False)


def test_set_stores_copy():
    """CRITICAL: Mutating a value after set() does not change storage.

    Why: transaction() rolls back with a shallow copy of the mapping, which
    only holds if stored values are never shared with callers.
    """
    storage = LocalStorage()
    payload = {"args": [1]}
    storage.set(TaskKey(1), payload)

    payload["args"].append(2)

    assert storage.get(TaskKey(1)) == {"args": [1]}


def test_rollback_ignores_caller_mutation():
    storage = LocalStorage()
    payload = [1]
    storage.set(TaskKey(1), payload)

    with pytest.raises(RuntimeError), storage.transaction():
        payload.append(2)
        raise RuntimeError("abort")

    assert storage.get(TaskKey(1)) == [1]


def test_transaction_commits_on_success():
    storage = LocalStorage()
    with storage.transaction():
        storage.set(CounterKey(), 1)
    assert storage.get(CounterKey()) == 1


def test_transaction_rolls_back_on_error():
    storage = LocalStorage()
    storage.set(CounterKey(), 1)

    with pytest.raises(RuntimeError), storage.transaction():
        storage.set(CounterKey(), 2)
        storage.set(TaskKey(2), "task")
        raise RuntimeError("abort")

    assert storage.get(CounterKey()) == 1
    assert not storage.has(TaskKey(2))


def test_nested_transaction_rolls_back_inner_only():
    storage = LocalStorage()
    with storage.transaction():
        storage.set(CounterKey(), 1)
        with pytest.raises(ValueError), storage.transaction():
            storage.set(CounterKey(), 99)
            raise ValueError("inner")
        assert storage.get(CounterKey()) == 1
    assert storage.get(CounterKey()) == 1


def test_snapshot_and_restore():
    storage = LocalStorage()
    storage.set(CounterKey(), 3)
    data = storage.snapshot()

    storage.set(CounterKey(), 4)
    storage.restore(data)

    assert storage.get(CounterKey()) == 3
    assert list(storage.keys()) == [CounterKey()]
