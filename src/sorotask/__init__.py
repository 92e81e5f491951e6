"""SoroTask: on-ledger task automation.

Callers register recurring tasks (target call, arguments, optional resolver
precondition, minimum interval); anyone may later ask the contract to
execute a task, which fires the target if the resolver agrees.

Usage:
    from sorotask import Address, Env, MockAllAuths, DirectoryInvoker, TaskConfig, TaskContract

    invoker = DirectoryInvoker()
    target = invoker.deploy(Vault())
    contract = TaskContract(Env(signer=MockAllAuths(), invoker=invoker))

    task_id = contract.register(
        TaskConfig(creator=Address("GCREATOR"), target=target, function="harvest", interval=3600)
    )
    contract.execute(task_id)
    contract.get_task(task_id).last_run  # ledger timestamp of the firing
"""

__version__ = "0.1.0"

# Contract
from sorotask.contract import TaskContract

# Core primitives
from sorotask.core import (
    Address,
    AuthorizationError,
    ContractError,
    ErrorCode,
    InvalidInterval,
    InvocationError,
    ReentrancyError,
    TaskConfig,
    TaskId,
    TaskNotFound,
)

# Host environment
from sorotask.host import (
    ContractEvent,
    DirectoryInvoker,
    Env,
    EventLog,
    ManualClock,
    MockAllAuths,
    StaticSigner,
    SystemClock,
)

# Storage
from sorotask.storage import (
    LocalStorage,
    SQLiteStorage,
    Storage,
    TaskRegistry,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "Address",
    "TaskConfig",
    "TaskId",
    "ErrorCode",
    "ContractError",
    "InvalidInterval",
    "TaskNotFound",
    "AuthorizationError",
    "InvocationError",
    "ReentrancyError",
    # Contract
    "TaskContract",
    # Host
    "Env",
    "MockAllAuths",
    "StaticSigner",
    "DirectoryInvoker",
    "SystemClock",
    "ManualClock",
    "EventLog",
    "ContractEvent",
    # Storage
    "Storage",
    "LocalStorage",
    "SQLiteStorage",
    "TaskRegistry",
]
