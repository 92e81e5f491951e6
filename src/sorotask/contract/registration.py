"""Task registration."""

from __future__ import annotations

import logging

from sorotask.core.errors import InvalidInterval
from sorotask.core.task import TaskConfig
from sorotask.host.env import Env
from sorotask.host.events import TASK_REGISTERED
from sorotask.storage.registry import TaskRegistry

logger = logging.getLogger(__name__)


def validate_interval(interval: object) -> None:
    """Reject intervals that are not positive integers.

    Raises:
        InvalidInterval: If ``interval`` is zero, negative or not an int.
    """
    if isinstance(interval, bool) or not isinstance(interval, int) or interval <= 0:
        raise InvalidInterval(interval)


def register_task(env: Env, registry: TaskRegistry, config: TaskConfig) -> int:
    """Validate and store a new task.

    Must run inside ``env.operation()``: any failure leaves the counter and
    the records untouched.

    Args:
        env: Host environment for the current operation.
        registry: Registry the task is written to.
        config: Caller-supplied configuration; its ``last_run`` is ignored.

    Returns:
        The new task ID.

    Raises:
        AuthorizationError: If the creator has not authorized the call.
        InvalidInterval: If ``config.interval`` is not positive.
    """
    env.require_auth(config.creator)
    validate_interval(config.interval)

    task_id = registry.allocate_id()
    registry.put(task_id, config.with_last_run(0))
    env.publish((TASK_REGISTERED, task_id), config.creator)

    logger.info(
        "Task registered id=%s creator=%s target=%s.%s interval=%s resolver=%s",
        task_id,
        config.creator,
        config.target,
        config.function,
        config.interval,
        config.resolver,
    )
    return task_id
