"""Example contracts and scripts for SoroTask.

This package demonstrates library usage but is not part of the core API.
"""

from .contracts import BalanceThreshold, Vault

__all__ = [
    "BalanceThreshold",
    "Vault",
]
