"""TaskContract: public entry points of the task-automation contract.

Usage:
    invoker = DirectoryInvoker()
    target = invoker.deploy(Vault())
    env = Env(signer=MockAllAuths(), invoker=invoker)
    contract = TaskContract(env)

    task_id = contract.register(
        TaskConfig(creator=creator, target=target, function="harvest", interval=3600)
    )
    contract.execute(task_id)
"""

from __future__ import annotations

from sorotask.contract.dispatch import execute_task
from sorotask.contract.registration import register_task
from sorotask.core.task import TaskConfig
from sorotask.host.env import Env
from sorotask.storage.registry import TaskRegistry


class TaskContract:
    """Task registry plus conditional dispatch, bound to a host environment.

    Each mutating entry point runs as one atomic ``env.operation()``.

    Args:
        env: Host environment (default: a fresh in-memory Env).
    """

    def __init__(self, env: Env | None = None):
        self._env = env or Env()
        self._registry = TaskRegistry(self._env.storage)

    @property
    def env(self) -> Env:
        return self._env

    @property
    def registry(self) -> TaskRegistry:
        return self._registry

    def register(self, config: TaskConfig) -> int:
        """Register a task and return its ID.

        Requires authorization from ``config.creator``. The stored record has
        ``last_run == 0`` whatever the caller passed.

        Raises:
            AuthorizationError: Creator has not authorized the call.
            InvalidInterval: ``config.interval`` is zero (or otherwise not positive).
        """
        with self._env.operation("register"):
            return register_task(self._env, self._registry, config)

    def get_task(self, task_id: int) -> TaskConfig | None:
        """Get a task's configuration, or None if it was never registered."""
        with self._env.view():
            return self._registry.get(task_id)

    def task_count(self) -> int:
        """Number of tasks registered so far; IDs run from 1 to this value."""
        with self._env.view():
            return self._registry.count()

    def execute(self, task_id: int) -> None:
        """Evaluate a task and fire it if ready. Callable by anyone.

        Not ready is a successful no-op. The task's interval is not checked.

        Raises:
            TaskNotFound: Unknown ``task_id``; nothing changes.
            InvocationError: The target call failed; nothing changes.
        """
        with self._env.operation("execute"):
            execute_task(self._env, self._registry, task_id)

    def monitor(self) -> None:
        """Reserved for batch scanning; currently does nothing."""
        return None
