"""In-process cross-contract invocation.

DirectoryInvoker maps addresses to plain Python objects ("deployed
contracts") and dispatches calls by attribute name.

Usage:
    invoker = DirectoryInvoker()
    target = invoker.deploy(Vault())
    invoker.call(target, "harvest", [vault_id])
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from sorotask.core.errors import InvocationError
from sorotask.core.identity import Address

logger = logging.getLogger(__name__)


class DirectoryInvoker:
    """Invoker over a directory of in-process contract objects.

    A selector resolves to a public callable attribute of the contract
    object; it is called with ``*args``. Anything the callee raises is
    wrapped in InvocationError with the original exception chained.
    """

    def __init__(self) -> None:
        self._contracts: dict[Address, Any] = {}

    def deploy(self, contract: Any, address: Address | None = None) -> Address:
        """Make ``contract`` callable at ``address`` (generated when omitted).

        Returns:
            The contract's address.
        """
        address = address or Address.generate("CONTRACT")
        if address in self._contracts:
            raise ValueError(f"A contract is already deployed at {address}")
        self._contracts[address] = contract
        return address

    def contract_at(self, address: Address) -> Any | None:
        """Get the object deployed at ``address``, or None."""
        return self._contracts.get(address)

    def call(self, address: Address, selector: str, args: Sequence[Any]) -> Any:
        contract = self._contracts.get(address)
        if contract is None:
            raise InvocationError(address, selector, "no contract deployed at address")

        fn = None if selector.startswith("_") else getattr(contract, selector, None)
        if not callable(fn):
            raise InvocationError(address, selector, "no such function")

        logger.debug("Invoking %s.%s with %d args", address, selector, len(args))
        try:
            return fn(*args)
        except Exception as e:
            raise InvocationError(address, selector, str(e) or type(e).__name__) from e
