"""Task record model.

Usage:
    config = TaskConfig(
        creator=creator,
        target=target,
        function="harvest",
        args=(vault_id,),
        interval=3600,
    )
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field

from sorotask.core.identity import Address
from sorotask.core.types import Val


@dataclass(frozen=True, slots=True)
class TaskConfig:
    """Configuration of a registered task.

    Frozen: the only field that changes after registration is ``last_run``,
    and it is changed by storing a replaced copy (see ``with_last_run``).

    Attributes:
        creator: Identity that registered the task.
        target: Contract invoked once the task is ready.
        function: Selector invoked on ``target``.
        interval: Minimum seconds between firings (advisory, see dispatch).
        args: Positional arguments for both resolver and target.
        resolver: Optional predicate contract; None means always ready.
        last_run: Ledger timestamp of the last successful firing, 0 if never.
        gas_balance: Advisory budget, never debited.
    """

    creator: Address
    target: Address
    function: str
    interval: int
    args: tuple[Val, ...] = field(default_factory=tuple)
    resolver: Address | None = None
    last_run: int = 0
    gas_balance: int = 0

    def __post_init__(self) -> None:
        # Accept any sequence for args but always store an immutable tuple.
        if not isinstance(self.args, tuple):
            object.__setattr__(self, "args", tuple(self.args))

    @property
    def has_run(self) -> bool:
        """True once the task has fired at least once."""
        return self.last_run != 0

    def with_last_run(self, timestamp: int) -> TaskConfig:
        """Return a copy with ``last_run`` replaced."""
        return dataclasses.replace(self, last_run=timestamp)

    def next_due(self) -> int:
        """Earliest ledger timestamp at which the interval has elapsed."""
        return self.last_run + self.interval
