"""Tests for execute-submission retry."""

import pytest

from sorotask import InvocationError, TaskNotFound
from sorotask.keeper import RetryPolicy, call_with_retry, is_duplicate_error, is_retryable_error

FAST = RetryPolicy(max_retries=3, base_delay=0, max_delay=0)


class CodedError(Exception):
    def __init__(self, code, message="rpc error"):
        super().__init__(message)
        self.code = code


class Flaky:
    """Coroutine callable failing with ``error`` for the first ``failures`` calls."""

    def __init__(self, failures, error):
        self.failures = failures
        self.error = error
        self.calls = 0

    async def __call__(self, *args):
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error
        return args or "ok"


@pytest.mark.parametrize(
    "error",
    [
        TimeoutError(),
        ConnectionError(),
        CodedError(503),
        CodedError(429),
        CodedError(-32603),
        RuntimeError("socket hang up"),
        RuntimeError("Request timed out"),
    ],
)
def test_retryable_errors(error):
    assert is_retryable_error(error)


@pytest.mark.parametrize(
    "error",
    [
        None,
        ValueError("bad argument"),
        CodedError(400),
        TaskNotFound(3),
        InvocationError("C1", "f", "connection refused by target"),
        RuntimeError("duplicate transaction"),
    ],
)
def test_non_retryable_errors(error):
    assert not is_retryable_error(error)


def test_duplicate_detection():
    assert is_duplicate_error(CodedError("tx_bad_seq"))
    assert is_duplicate_error(RuntimeError("Transaction already submitted"))
    assert not is_duplicate_error(RuntimeError("timeout"))
    assert not is_duplicate_error(None)


@pytest.mark.asyncio
async def test_transient_failure_recovers():
    fn = Flaky(2, TimeoutError("slow"))

    assert await call_with_retry(fn, 1, 2, policy=FAST) == (1, 2)
    assert fn.calls == 3


@pytest.mark.asyncio
async def test_non_retryable_error_raises_immediately():
    fn = Flaky(5, ValueError("bad"))

    with pytest.raises(ValueError):
        await call_with_retry(fn, policy=FAST)
    assert fn.calls == 1


@pytest.mark.asyncio
async def test_contract_error_is_final():
    fn = Flaky(5, TaskNotFound(9))

    with pytest.raises(TaskNotFound):
        await call_with_retry(fn, policy=FAST)
    assert fn.calls == 1


@pytest.mark.asyncio
async def test_exhaustion_reports_and_raises():
    fn = Flaky(10, ConnectionError("down"))
    exhausted = []

    with pytest.raises(ConnectionError):
        await call_with_retry(fn, policy=FAST, on_exhausted=exhausted.append)

    assert fn.calls == FAST.max_retries + 1
    assert len(exhausted) == 1
    assert isinstance(exhausted[0], ConnectionError)


@pytest.mark.asyncio
async def test_zero_retries_makes_one_attempt():
    fn = Flaky(1, TimeoutError())

    with pytest.raises(TimeoutError):
        await call_with_retry(fn, policy=RetryPolicy(max_retries=0, base_delay=0, max_delay=0))
    assert fn.calls == 1


@pytest.mark.asyncio
async def test_duplicate_submission_counts_as_success():
    fn = Flaky(1, CodedError("DUPLICATE_TRANSACTION", "duplicate"))

    assert await call_with_retry(fn, policy=FAST) is None
    assert fn.calls == 1
