"""Share indices and index-tagged values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

MAX_SHARE_INDEX = 2**32 - 1

A = TypeVar("A")


def share_index(value: int) -> int:
    """Validate a share index: a non-zero unsigned 32-bit integer (0 is the secret itself)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"share index must be an int, not {type(value).__name__}")
    if not 1 <= value <= MAX_SHARE_INDEX:
        raise ValueError(f"share index must be in 1..{MAX_SHARE_INDEX}, got {value}")
    return value


@dataclass(frozen=True)
class IndexedValue(Generic[A]):
    """A value associated with a specific share index."""

    index: int
    value: A

    def __post_init__(self) -> None:
        share_index(self.index)