"""Conditional dispatch: decide whether a task fires, fire it, record it.

Dispatch does not compare ``now - last_run`` with the task's
interval. Readiness is decided by the resolver alone, so every ready call
fires the target. Due-time scheduling is the caller's business (see
sorotask.keeper).
"""

from __future__ import annotations

import logging

from sorotask.core.errors import TaskNotFound
from sorotask.core.task import TaskConfig
from sorotask.host.env import Env
from sorotask.storage.registry import TaskRegistry

logger = logging.getLogger(__name__)

CHECK_CONDITION = "check_condition"
"""Selector every resolver contract implements: ``check_condition(*args) -> bool``."""


def is_ready(env: Env, task_id: int, config: TaskConfig) -> bool:
    """Evaluate the task's precondition.

    Without a resolver the task is always ready. With one, only a result
    that is exactly ``True`` counts: a failed call, ``False`` or any
    non-bool value means "not ready". Resolver failures never propagate,
    whatever they raise, except KeyboardInterrupt and SystemExit: those are
    host aborts and roll back the whole operation.
    """
    if config.resolver is None:
        return True

    result = env.try_invoke(config.resolver, CHECK_CONDITION, config.args)
    if not result.ok:
        logger.warning(
            "Resolver %s failed for task %s, treating as not ready: %s",
            config.resolver,
            task_id,
            result.error,
        )
        return False
    if result.value is not True:
        logger.debug("Resolver %s returned %r for task %s", config.resolver, result.value, task_id)
        return False
    return True


def execute_task(env: Env, registry: TaskRegistry, task_id: int) -> bool:
    """Fire the task if its precondition holds.

    Must run inside ``env.operation()``. A target failure propagates and the
    enclosing operation rolls back, leaving ``last_run`` unchanged.

    Args:
        env: Host environment for the current operation.
        registry: Registry holding the task.
        task_id: Task to evaluate.

    Returns:
        True if the target was invoked, False if the task was not ready.

    Raises:
        TaskNotFound: If ``task_id`` was never registered.
        InvocationError: If the target call fails.
    """
    config = registry.get(task_id)
    if config is None:
        raise TaskNotFound(task_id)

    if not is_ready(env, task_id, config):
        logger.debug("Task %s not ready, skipping", task_id)
        return False

    # Return value is discarded; only success matters.
    env.invoke(config.target, config.function, config.args)

    now = env.timestamp()
    registry.put(task_id, config.with_last_run(now))
    logger.info("Task %s fired %s.%s last_run=%s", task_id, config.target, config.function, now)
    return True
