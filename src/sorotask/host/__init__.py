"""Host environment: the ledger capabilities a contract runs against.

Architecture Note:
    host/ stands in for the ledger. The contract reaches storage,
    authorization, other contracts, time and events only through Env.
"""

from sorotask.host.auth import MockAllAuths, StaticSigner
from sorotask.host.clock import ManualClock, SystemClock
from sorotask.host.env import CallResult, Env
from sorotask.host.events import TASK_REGISTERED, ContractEvent, EventLog
from sorotask.host.invoker import DirectoryInvoker
from sorotask.host.protocol import EventSink, Invoker, LedgerClock, Signer

__all__ = [
    # Protocols
    "Signer",
    "Invoker",
    "LedgerClock",
    "EventSink",
    # Environment
    "Env",
    "CallResult",
    # Implementations
    "MockAllAuths",
    "StaticSigner",
    "DirectoryInvoker",
    "SystemClock",
    "ManualClock",
    "EventLog",
    "ContractEvent",
    "TASK_REGISTERED",
]
