"""Keeper models: polling outcomes, statistics and retry configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sorotask.config import KeeperSettings


class PollOutcome(Enum):
    """Why a task was or was not selected for execution."""

    DUE = "due"
    NOT_DUE = "not_due"
    NOT_FOUND = "not_found"
    SKIPPED = "skipped"
    """Excluded by the gas monitor (balance <= 0)."""


@dataclass(frozen=True, slots=True)
class PollResult:
    """Result of checking one task."""

    task_id: int
    outcome: PollOutcome
    next_due: int | None = None

    @property
    def is_due(self) -> bool:
        return self.outcome is PollOutcome.DUE


@dataclass(slots=True)
class PollStats:
    """Counters for the most recent polling cycle."""

    last_poll_time: float | None = None
    tasks_checked: int = 0
    tasks_due: int = 0
    tasks_skipped: int = 0
    errors: int = 0


@dataclass(slots=True)
class CycleStats:
    """Outcome of one execution-queue cycle."""

    queued: int = 0
    excluded: int = 0
    """Tasks left out because they failed in an earlier cycle."""
    completed: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """Configuration for retrying failed execute submissions."""

    max_retries: int = 3
    """Retries after the first attempt (0 = no retry)."""

    base_delay: float = 1.0
    """Base delay in seconds; doubles per retry, plus up to base_delay of jitter."""

    max_delay: float = 10.0
    """Upper bound on a single delay in seconds."""

    @classmethod
    def from_settings(cls, settings: KeeperSettings) -> RetryPolicy:
        return cls(
            max_retries=settings.max_retries,
            base_delay=settings.base_delay,
            max_delay=settings.max_delay,
        )
