"""Ledger identity models.

Usage:
    creator = Address("GCREATOR")
    target = Address.generate()
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass

_generated = itertools.count(1)


@dataclass(frozen=True, slots=True)
class Address:
    """Identity of an account or contract on the ledger.

    The core never interprets the value: it is compared, hashed and handed to
    the Signer and Invoker capabilities as-is.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value:
            raise ValueError(f"Address value must be a non-empty string, got {self.value!r}")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls, prefix: str = "ADDR") -> Address:
        """Create a fresh, process-unique address (test helper)."""
        return cls(f"{prefix}{next(_generated):08d}")
