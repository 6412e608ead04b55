"""Internal record types for pipeline passes."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BlockRange:
    """Inclusive block range handed to the log fetcher."""

    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start + 1


@dataclass
class PassResult:
    """Outcome of one pipeline pass over a block range."""

    block_range: BlockRange | None
    fetched: int = 0
    notified: int = 0
    deferred: int = 0
    duplicates: int = 0
    ignored: int = 0
    failed: int = 0
    advanced_to: int | None = None
