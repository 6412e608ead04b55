"""BlockSource protocol - emits new chain head heights."""

from __future__ import annotations

from typing import AsyncIterator, Protocol


class BlockSource(Protocol):
    """Yields block heights as the chain advances."""

    def heads(self) -> AsyncIterator[int]:
        ...
