"""Host capability protocols.

The contract never talks to the ledger directly. Authorization, cross-contract
calls, ledger time and event transport are injected through these protocols,
so the engine can be exercised against deterministic fakes.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from sorotask.core.identity import Address

if TYPE_CHECKING:
    from sorotask.host.events import ContractEvent


@runtime_checkable
class Signer(Protocol):
    """Checks that an address has authorized the current operation."""

    def require_auth(self, address: Address) -> None:
        """Return normally if authorized.

        Raises:
            AuthorizationError: If ``address`` has not authorized the operation.
        """
        ...


@runtime_checkable
class Invoker(Protocol):
    """Invokes a function on another contract."""

    def call(self, address: Address, selector: str, args: Sequence[Any]) -> Any:
        """Call ``selector`` on the contract at ``address`` with ``args``.

        Returns:
            The callee's return value.

        Raises:
            InvocationError: If the contract or function is missing, or the
                callee fails.
        """
        ...


@runtime_checkable
class LedgerClock(Protocol):
    """Source of ledger time."""

    def timestamp(self) -> int:
        """Current ledger timestamp in seconds."""
        ...


@runtime_checkable
class EventSink(Protocol):
    """Transport for contract events."""

    def publish(self, event: ContractEvent) -> None:
        """Deliver a committed event."""
        ...
