"""Host environment.

Env bundles the capabilities a contract operation needs (storage, signer,
invoker, ledger clock, event sink) and provides the atomic operation scope.

Usage:
    env = Env(signer=MockAllAuths(), invoker=invoker, clock=ManualClock(100))
    with env.operation("register"):
        env.require_auth(creator)
        env.storage.set(...)
        env.publish(("TaskRegistered", 1), creator)
    # storage committed, event delivered
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sorotask.core.errors import ReentrancyError
from sorotask.core.identity import Address
from sorotask.host.auth import StaticSigner
from sorotask.host.clock import SystemClock
from sorotask.host.events import ContractEvent, EventLog
from sorotask.host.invoker import DirectoryInvoker
from sorotask.host.protocol import EventSink, Invoker, LedgerClock, Signer
from sorotask.storage.local import LocalStorage
from sorotask.storage.protocol import Storage
from sorotask.storage.sqlite import SQLiteStorage

if TYPE_CHECKING:
    from sorotask.config import ContractSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CallResult:
    """Outcome of a guarded cross-contract call (see Env.try_invoke)."""

    ok: bool
    value: Any = None
    error: BaseException | None = None


class Env:
    """Capabilities and transaction scope for contract operations.

    Operations are serialized: ``operation()`` holds a host-wide lock for the
    whole call, nested cross-calls included. A nested call that tries to start
    another operation on the same Env (re-entry) is rejected.

    Args:
        storage: Durable key-value backend (default: LocalStorage).
        signer: Authorization check (default: StaticSigner with nobody signed).
        invoker: Cross-contract call mechanism (default: empty DirectoryInvoker).
        clock: Ledger time source (default: SystemClock).
        events: Sink for committed events (default: EventLog).
    """

    def __init__(
        self,
        storage: Storage | None = None,
        signer: Signer | None = None,
        invoker: Invoker | None = None,
        clock: LedgerClock | None = None,
        events: EventSink | None = None,
    ):
        self.storage: Storage = storage if storage is not None else LocalStorage()
        self.signer: Signer = signer if signer is not None else StaticSigner()
        self.invoker: Invoker = invoker if invoker is not None else DirectoryInvoker()
        self.clock: LedgerClock = clock if clock is not None else SystemClock()
        self.events: EventSink = events if events is not None else EventLog()
        self._lock = threading.RLock()
        self._active: str | None = None
        self._pending: list[ContractEvent] = []

    @classmethod
    def from_settings(
        cls,
        settings: ContractSettings,
        *,
        signer: Signer | None = None,
        invoker: Invoker | None = None,
        clock: LedgerClock | None = None,
        events: EventSink | None = None,
    ) -> Env:
        """Build an Env whose storage backend is chosen by settings."""
        storage: Storage
        if settings.storage_backend == "sqlite":
            storage = SQLiteStorage(settings.db_path)
        else:
            storage = LocalStorage()
        return cls(storage=storage, signer=signer, invoker=invoker, clock=clock, events=events)

    @property
    def active_operation(self) -> str | None:
        """Name of the operation currently running, if any."""
        return self._active

    @contextmanager
    def operation(self, name: str) -> Iterator[None]:
        """Run a block as one atomic contract operation.

        On success storage is committed and buffered events are published in
        emission order. On any exception storage is rolled back, buffered
        events are dropped and the exception propagates.

        Raises:
            ReentrancyError: If an operation is already running on this Env
                in the current thread.
        """
        with self._lock:
            if self._active is not None:
                raise ReentrancyError(f"Cannot start {name} while {self._active} is running")
            self._active = name
            self._pending = []
            try:
                with self.storage.transaction():
                    yield
            except BaseException:
                if self._pending:
                    logger.debug("Dropping %d events from aborted %s", len(self._pending), name)
                raise
            else:
                for event in self._pending:
                    self.events.publish(event)
            finally:
                self._pending = []
                self._active = None

    @contextmanager
    def view(self) -> Iterator[None]:
        """Read-only scope: serialized with operations, no transaction."""
        with self._lock:
            yield

    def require_auth(self, address: Address) -> None:
        self.signer.require_auth(address)

    def timestamp(self) -> int:
        return self.clock.timestamp()

    def publish(self, topics: tuple[Any, ...], data: Any) -> None:
        """Emit an event; inside an operation it is delivered only on commit."""
        event = ContractEvent(topics=topics, data=data, timestamp=self.timestamp())
        if self._active is None:
            self.events.publish(event)
        else:
            self._pending.append(event)

    def invoke(self, address: Address, selector: str, args: Sequence[Any]) -> Any:
        """Call another contract; failures propagate."""
        return self.invoker.call(address, selector, args)

    def try_invoke(self, address: Address, selector: str, args: Sequence[Any]) -> CallResult:
        """Call another contract, capturing failure instead of raising.

        Storage writes made during a failed call are rolled back; the enclosing
        operation continues. Any raised BaseException is captured except
        KeyboardInterrupt and SystemExit, which abort the host and propagate.
        """
        try:
            with self.storage.transaction():
                value = self.invoker.call(address, selector, args)
        except (KeyboardInterrupt, SystemExit):
            raise
        except BaseException as e:
            return CallResult(ok=False, error=e)
        return CallResult(ok=True, value=value)
