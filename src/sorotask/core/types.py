"""Shared type aliases."""

from typing import Any, TypeAlias

TaskId: TypeAlias = int
"""Sequential task identifier, starting at 1."""

Val: TypeAlias = Any
"""Opaque argument value passed through to resolvers and targets."""
