"""Signer implementations.

Usage:
    signer = StaticSigner({creator})
    signer.require_auth(creator)  # ok
    signer.require_auth(other)    # AuthorizationError

    signer = MockAllAuths()       # tests: every address is authorized
"""

from __future__ import annotations

from collections.abc import Iterable

from sorotask.core.errors import AuthorizationError
from sorotask.core.identity import Address


class MockAllAuths:
    """Signer that authorizes every address and records each check."""

    def __init__(self) -> None:
        self.auths: list[Address] = []

    def require_auth(self, address: Address) -> None:
        self.auths.append(address)


class StaticSigner:
    """Signer backed by a fixed set of addresses that have signed.

    Args:
        authorized: Addresses whose authorization accompanies the call.
    """

    def __init__(self, authorized: Iterable[Address] = ()) -> None:
        self._authorized: set[Address] = set(authorized)
        self.auths: list[Address] = []

    def authorize(self, address: Address) -> None:
        """Add ``address`` to the signed set."""
        self._authorized.add(address)

    def revoke(self, address: Address) -> None:
        """Remove ``address`` from the signed set."""
        self._authorized.discard(address)

    def require_auth(self, address: Address) -> None:
        if address not in self._authorized:
            raise AuthorizationError(address)
        self.auths.append(address)
