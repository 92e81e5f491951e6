"""Retry policy for execute submissions, built on tenacity.

Transient failures (timeouts, dropped connections, rate limiting) are retried
with exponential backoff and jitter. Contract errors are final: a task that
is missing, or whose target failed, will not succeed by resubmitting now.
A duplicate submission means an earlier attempt already landed, so it counts
as success.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import tenacity

from sorotask.core.errors import ContractError
from sorotask.keeper.models import RetryPolicy

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRYABLE_CODES = frozenset({408, 429, 500, 502, 503, 504, -32000, -32001, -32005, -32603})
DUPLICATE_CODES = frozenset({"DUPLICATE_TRANSACTION", "tx_bad_seq", "tx_duplicate"})
_RETRYABLE_MARKERS = ("timeout", "timed out", "network", "rate limit", "socket", "connection")
_DUPLICATE_MARKERS = ("duplicate", "already submitted", "tx_bad_seq")


def is_duplicate_error(error: BaseException | None) -> bool:
    """True if ``error`` reports a submission that already went through."""
    if error is None:
        return False
    if getattr(error, "code", None) in DUPLICATE_CODES:
        return True
    message = str(error).lower()
    return any(marker in message for marker in _DUPLICATE_MARKERS)


def is_retryable_error(error: BaseException | None) -> bool:
    """True if ``error`` is transient and worth another attempt."""
    if error is None or is_duplicate_error(error):
        return False
    if isinstance(error, ContractError):
        return False
    if isinstance(error, (TimeoutError, ConnectionError)):
        return True
    if getattr(error, "code", None) in RETRYABLE_CODES:
        return True
    message = str(error).lower()
    return any(marker in message for marker in _RETRYABLE_MARKERS)


def _backoff(policy: RetryPolicy) -> Callable[[tenacity.RetryCallState], float]:
    """Exponential wait plus jitter, capped at ``policy.max_delay``."""
    uncapped = tenacity.wait_exponential(multiplier=policy.base_delay) + tenacity.wait_random(
        0, policy.base_delay
    )

    def wait(retry_state: tenacity.RetryCallState) -> float:
        return min(uncapped(retry_state), policy.max_delay)

    return wait


def build_retryer(policy: RetryPolicy) -> tenacity.AsyncRetrying:
    """Build a tenacity retryer from RetryPolicy configuration."""
    return tenacity.AsyncRetrying(
        stop=tenacity.stop_after_attempt(policy.max_retries + 1),
        wait=_backoff(policy),
        retry=tenacity.retry_if_exception(is_retryable_error),
        before_sleep=tenacity.before_sleep_log(logger, logging.INFO),
        reraise=True,
    )


async def call_with_retry(
    fn: Callable[..., Awaitable[T]],
    *args: Any,
    policy: RetryPolicy | None = None,
    on_exhausted: Callable[[BaseException], None] | None = None,
) -> T | None:
    """Await ``fn(*args)``, retrying transient failures.

    Args:
        fn: Coroutine function to call.
        *args: Arguments for ``fn``.
        policy: Retry configuration (default: RetryPolicy()).
        on_exhausted: Called with the last error when retries run out on a
            retryable error, before it propagates.

    Returns:
        The result of ``fn``, or None when a duplicate submission was
        treated as success.

    Raises:
        Exception: The last error, if not retryable or retries ran out.
    """
    policy = policy or RetryPolicy()
    attempt_number = 0
    try:
        async for attempt in build_retryer(policy):
            with attempt:
                attempt_number = attempt.retry_state.attempt_number
                result = await fn(*args)
                if attempt_number > 1:
                    logger.info("Execution succeeded on attempt %d", attempt_number)
                return result
    except Exception as e:
        if is_duplicate_error(e):
            logger.info("Treating duplicate submission as success on attempt %d", attempt_number)
            return None
        if is_retryable_error(e):
            logger.warning(
                "MAX_RETRIES_EXCEEDED: failed after %d retries: %s", policy.max_retries, e
            )
            if on_exhausted is not None:
                on_exhausted(e)
        raise
    return None  # pragma: no cover
