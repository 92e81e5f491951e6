"""Toy target and resolver contracts used by the example scripts."""

from dataclasses import dataclass, field


@dataclass
class Vault:
    """Target contract: harvesting moves pending rewards into the balance."""

    balance: int = 0
    pending: int = 0
    harvests: list[int] = field(default_factory=list)

    def accrue(self, amount: int) -> None:
        self.pending += amount

    def harvest(self, vault_id: int) -> int:
        harvested, self.pending = self.pending, 0
        self.balance += harvested
        self.harvests.append(vault_id)
        return harvested


@dataclass
class BalanceThreshold:
    """Resolver contract: ready once the vault has enough pending rewards."""

    vault: Vault
    minimum: int

    def check_condition(self, vault_id: int) -> bool:
        return self.vault.pending >= self.minimum
