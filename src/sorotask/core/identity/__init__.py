"""Ledger identities."""

from sorotask.core.identity.models import Address

__all__ = [
    "Address",
]
