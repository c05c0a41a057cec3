"""Data models shared by the traversal engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Union

import humanize


@dataclass(frozen=True, slots=True)
class Stats:
    """Byte size and item count accumulated for part of a tree.

    Stats form a monoid under :meth:`merge`: field-wise addition with
    ``Stats()`` as the identity. Partial results can therefore be folded in
    any order and grouping.
    """

    total_bytes: int = 0
    item_count: int = 0

    @classmethod
    def identity(cls) -> "Stats":
        return cls()

    @classmethod
    def for_file(cls, size: int) -> "Stats":
        """Stats of a single file of ``size`` bytes."""

        return cls(total_bytes=size, item_count=1)

    @classmethod
    def sum(cls, items: Iterable["Stats"]) -> "Stats":
        total = cls()
        for item in items:
            total = total.merge(item)
        return total

    def merge(self, other: "Stats") -> "Stats":
        return Stats(
            total_bytes=self.total_bytes + other.total_bytes,
            item_count=self.item_count + other.item_count,
        )

    def __add__(self, other: object) -> "Stats":
        if not isinstance(other, Stats):
            return NotImplemented
        return self.merge(other)

    def human_size(self) -> str:
        return humanize.naturalsize(self.total_bytes, binary=True)

    def __str__(self) -> str:
        return f"{self.total_bytes} bytes ({self.human_size()}) across {self.item_count} items"


@dataclass(frozen=True, slots=True)
class FileSize:
    """Successful size lookup of a regular file."""

    size: int


@dataclass(frozen=True, slots=True)
class SkippedEntry:
    """Entry whose metadata could not be read; contributes nothing."""

    path: Path
    reason: OSError


FileMeasurement = Union[FileSize, SkippedEntry]


class TerminationPolicy(str, Enum):
    """How an idle worker decides that the traversal is over."""

    # Exit once the channel is empty and no scan is in flight.
    QUIESCENCE = "quiescence"
    # Exit on the first receive timeout, even if other workers are still scanning.
    IDLE_TIMEOUT = "idle-timeout"


@dataclass(slots=True)
class TraversalResult:
    """Outcome of one pool traversal, broken down by participant."""

    root: Path
    root_stats: Stats
    worker_stats: List[Stats] = field(default_factory=list)
    elapsed: float = 0.0
    skipped: int = 0

    @property
    def workers(self) -> int:
        return len(self.worker_stats)

    @property
    def total(self) -> Stats:
        return Stats.sum([self.root_stats, *self.worker_stats])
