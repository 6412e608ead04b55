"""Block cursor: tracks the last fully processed height."""

from __future__ import annotations

from mintburn_watch.models.records import BlockRange


class BlockCursor:
    """Computes the next unprocessed range for each new head.

    The first head seen after startup yields the single-block range
    [head, head]; history before startup is never backfilled.
    """

    def __init__(self) -> None:
        self._last: int | None = None

    @property
    def last_processed(self) -> int | None:
        return self._last

    def next_range(self, head: int) -> BlockRange | None:
        """Range to process for ``head``, or None if nothing is new."""
        if self._last is None:
            return BlockRange(head, head)
        start = self._last + 1
        if head < start:
            return None
        return BlockRange(start, head)

    def advance(self, height: int) -> None:
        """Mark everything up to ``height`` processed. Never moves backward."""
        if self._last is None or height > self._last:
            self._last = height
