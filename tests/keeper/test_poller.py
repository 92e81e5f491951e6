"""Tests for the keeper's polling engine.

Critical Invariants:
- A task is due exactly when last_run + interval <= ledger time
- Tasks with gas_balance <= 0 are skipped, never due
- A failing read is counted and never aborts the poll
"""

import asyncio

import pytest

from sorotask import Address, ManualClock, TaskConfig
from sorotask.keeper import GasMonitor, PollOutcome, TaskPoller

NOW = 10_000


def _task(last_run=0, interval=100, gas_balance=1000):
    return TaskConfig(
        creator=Address("GC"),
        target=Address("CT"),
        function="f",
        interval=interval,
        last_run=last_run,
        gas_balance=gas_balance,
    )


def _poller(tasks, clock=None, **kwargs):
    def read(task_id):
        value = tasks.get(task_id)
        if isinstance(value, BaseException):
            raise value
        return value

    return TaskPoller(read, clock or ManualClock(NOW), **kwargs)


@pytest.mark.asyncio
async def test_never_run_task_is_due():
    poller = _poller({1: _task(last_run=0)})
    assert await poller.poll_due_tasks([1]) == [1]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("last_run", "expected"),
    [(NOW - 100, PollOutcome.DUE), (NOW - 99, PollOutcome.NOT_DUE), (NOW - 500, PollOutcome.DUE)],
)
async def test_due_boundary(last_run, expected):
    """CRITICAL: Due means last_run + interval <= now, inclusive."""
    poller = _poller({1: _task(last_run=last_run, interval=100)})

    result = await poller.check_task(1, NOW)

    assert result.outcome is expected
    assert result.next_due == last_run + 100


@pytest.mark.asyncio
async def test_task_becomes_due_as_clock_advances():
    clock = ManualClock(NOW)
    poller = _poller({1: _task(last_run=NOW, interval=60)}, clock=clock)

    assert await poller.poll_due_tasks([1]) == []
    clock.advance(60)
    assert await poller.poll_due_tasks([1]) == [1]


@pytest.mark.asyncio
async def test_missing_task_not_due():
    poller = _poller({})
    result = await poller.check_task(5, NOW)
    assert result.outcome is PollOutcome.NOT_FOUND
    assert await poller.poll_due_tasks([5]) == []


@pytest.mark.asyncio
@pytest.mark.parametrize("gas_balance", [0, -10])
async def test_exhausted_gas_is_skipped(gas_balance):
    poller = _poller({1: _task(gas_balance=gas_balance), 2: _task()})

    due = await poller.poll_due_tasks([1, 2])

    assert due == [2]
    assert poller.stats.tasks_skipped == 1
    assert poller.stats.tasks_checked == 2


@pytest.mark.asyncio
async def test_read_errors_are_counted():
    poller = _poller({1: RuntimeError("rpc down"), 2: _task()})

    due = await poller.poll_due_tasks([1, 2])

    assert due == [2]
    stats = poller.stats
    assert stats.errors == 1
    assert stats.tasks_checked == 1
    assert stats.tasks_due == 1
    assert stats.last_poll_time is not None


@pytest.mark.asyncio
async def test_due_ids_keep_input_order():
    tasks = {i: _task() for i in range(1, 6)}
    poller = _poller(tasks)
    assert await poller.poll_due_tasks([5, 3, 1]) == [5, 3, 1]


@pytest.mark.asyncio
async def test_empty_poll_resets_stats():
    poller = _poller({1: _task()})
    await poller.poll_due_tasks([1])
    assert await poller.poll_due_tasks([]) == []
    assert poller.stats.tasks_checked == 0


@pytest.mark.asyncio
async def test_reads_respect_concurrency_limit():
    in_flight = 0
    peak = 0

    async def tracked_check(task_id, now):
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.01)
        in_flight -= 1
        return await original(task_id, now)

    poller = _poller({i: _task() for i in range(10)}, max_concurrent_reads=2)
    original = poller.check_task
    poller.check_task = tracked_check

    due = await poller.poll_due_tasks(range(10))

    assert len(due) == 10
    assert peak <= 2


def test_invalid_concurrency_rejected():
    with pytest.raises(ValueError):
        _poller({}, max_concurrent_reads=0)


def test_gas_monitor_low_balance_tracking():
    monitor = GasMonitor(warn_threshold=500)

    assert monitor.check_gas_balance(1, 100) is False
    assert monitor.check_gas_balance(2, 1000) is False
    assert monitor.check_gas_balance(3, 0) is True
    assert monitor.low_gas_tasks() == [1]

    monitor.check_gas_balance(1, 800)
    assert monitor.low_gas_count == 0
